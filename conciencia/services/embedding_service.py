# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import List, Optional

import httpx

from conciencia.config import EMBEDDING_API_URL, EMBEDDING_MODEL

logger = logging.getLogger(__name__)


async def generate_embedding(
    http: httpx.AsyncClient,
    text: str,
    api_key: Optional[str],
) -> Optional[List[float]]:
    """Embeds text with Google's embedding API. Returns None on any failure."""
    if not api_key:
        return None

    try:
        response = await http.post(
            EMBEDDING_API_URL,
            params={"key": api_key},
            json={
                "model": f"models/{EMBEDDING_MODEL}",
                "content": {"parts": [{"text": text}]},
            },
        )
    except httpx.HTTPError as e:
        logger.error(f"[Embedding] Request failed: {e}")
        return None

    if response.status_code != 200:
        logger.error(f"[Embedding] Error {response.status_code}: {response.text}")
        return None

    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"[Embedding] Invalid JSON: {e}")
        return None

    embedding = data.get("embedding") if isinstance(data, dict) else None
    values = embedding.get("values") if isinstance(embedding, dict) else None
    if not isinstance(values, list):
        logger.error(f"[Embedding] Unexpected response shape: {str(data)[:200]}")
        return None

    return values or None
