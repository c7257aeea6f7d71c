# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from conciencia.services.supabase_client import BackendError, SupabaseClient

logger = logging.getLogger(__name__)


async def save_chat_turn(
    backend: SupabaseClient,
    conversacion_id: Optional[str],
    user_message: str,
    reply: Dict[str, Any],
) -> bool:
    """
    Appends the user message and the assistant reply to mensajes_chat and
    bumps the conversation's updated_at. Best-effort: returns False on failure.
    """
    if not conversacion_id or not backend.is_configured:
        return False

    try:
        await backend.insert("mensajes_chat", {
            "conversacion_id": conversacion_id,
            "role": "user",
            "content": user_message,
        })
        await backend.insert("mensajes_chat", {
            "conversacion_id": conversacion_id,
            "role": "assistant",
            "content": reply.get("respuesta_conversacional") or "",
            "analisis": reply.get("analisis"),
        })
        await backend.update("conversaciones", conversacion_id, {
            "updated_at": datetime.now(timezone.utc).isoformat(),
        })
    except BackendError as e:
        logger.error(f"[Conversaciones] Could not save turn for {conversacion_id}: {e}")
        return False

    return True
