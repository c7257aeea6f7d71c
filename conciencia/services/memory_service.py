# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import json
import logging
from typing import Any, Dict, List, Optional

from conciencia.services.supabase_client import BackendError, SupabaseClient, eq

logger = logging.getLogger(__name__)

SIMILAR_RECORDS_RPC = "buscar_registros_similares"
RECENT_ACHIEVEMENTS_RPC = "obtener_logros_recientes"

SIMILAR_MATCH_COUNT = 5
RECENT_RECORDS_LIMIT = 10
RECENT_ACHIEVEMENTS_DAYS = 7

RECENT_RECORD_COLUMNS = "mensaje_raw,estado_emocional,voz_identificada,pensamiento_alternativo,created_at"


async def search_similar_records(
    backend: SupabaseClient,
    embedding: Optional[List[float]],
    user_id: Optional[str],
) -> List[Dict[str, Any]]:
    """Nearest-neighbour lookup delegated to the backend RPC. Empty list on failure."""
    if not embedding or not user_id or not backend.is_configured:
        return []

    try:
        rows = await backend.rpc(SIMILAR_RECORDS_RPC, {
            "query_embedding": json.dumps(embedding),
            "match_count": SIMILAR_MATCH_COUNT,
            "user_uuid": user_id,
        })
    except BackendError as e:
        logger.error(f"[Memory] Vector search failed: {e}")
        return []

    return rows if isinstance(rows, list) else []


async def get_recent_records(backend: SupabaseClient, user_id: Optional[str]) -> List[Dict[str, Any]]:
    if not user_id or not backend.is_configured:
        return []

    try:
        return await backend.select(
            "registros_emocionales",
            columns=RECENT_RECORD_COLUMNS,
            filters={"user_id": eq(user_id)},
            order="created_at.desc",
            limit=RECENT_RECORDS_LIMIT,
        )
    except BackendError as e:
        logger.error(f"[Memory] Recent records failed: {e}")
        return []


async def get_recent_achievements(backend: SupabaseClient, user_id: Optional[str]) -> List[Dict[str, Any]]:
    if not user_id or not backend.is_configured:
        return []

    try:
        rows = await backend.rpc(RECENT_ACHIEVEMENTS_RPC, {
            "user_uuid": user_id,
            "dias": RECENT_ACHIEVEMENTS_DAYS,
        })
    except BackendError as e:
        logger.warning(f"[Memory] Recent achievements failed: {e}")
        return []

    return rows if isinstance(rows, list) else []


async def load_memory_context(
    backend: SupabaseClient,
    embedding: Optional[List[float]],
    user_id: Optional[str],
):
    """
    Returns (similar_records, recent_records).
    Recent records are only fetched when the similarity search came back empty.
    """
    similar = await search_similar_records(backend, embedding, user_id)
    recent = []
    if not similar:
        recent = await get_recent_records(backend, user_id)
    return similar, recent
