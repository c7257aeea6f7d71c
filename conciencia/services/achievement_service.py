# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Any, Dict, Optional

from conciencia.services.supabase_client import BackendError, SupabaseClient

logger = logging.getLogger(__name__)

# First match wins
CATEGORY_KEYWORDS = [
    ("autocuidado", ("medita", "autocuidado", "levant")),
    ("productividad", ("poller", "trabajo", "tarea", "estudi")),
    ("social", ("límite", "limite", "relaci", "social")),
    ("fisico", ("ejerci", "físic", "fisic", "camin")),
    ("emocional", ("emoci", "impulso", "control")),
]


def detect_achievement_category(analisis: Optional[Dict[str, Any]]) -> str:
    analisis = analisis or {}
    combined = f"{analisis.get('contexto') or ''} {analisis.get('logro_detectado') or ''}".lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(k in combined for k in keywords):
            return category
    return "general"


async def save_achievement(
    backend: SupabaseClient,
    user_id: str,
    analisis: Dict[str, Any],
    mensaje_origen: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """Stores the model-detected logro. Failures are logged and swallowed."""
    descripcion = analisis.get("logro_detectado")
    if not descripcion:
        return None

    try:
        return await backend.insert("logros", {
            "user_id": user_id,
            "descripcion": descripcion,
            "categoria": detect_achievement_category(analisis),
            "fuente": "implicito",
            "mensaje_origen": mensaje_origen,
        })
    except BackendError as e:
        logger.error(f"[Logros] Could not save achievement: {e}")
        return None


async def save_record_with_achievement(backend: SupabaseClient, record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Writes the emotional record, then the achievement if one was detected.
    The two inserts are independent: a failed achievement never undoes the record.
    """
    saved = await backend.insert("registros_emocionales", record)

    logro = None
    if record.get("logro_detectado") and record.get("user_id"):
        logro = await save_achievement(
            backend,
            record["user_id"],
            {"contexto": record.get("contexto"), "logro_detectado": record["logro_detectado"]},
            mensaje_origen=record.get("mensaje_raw"),
        )

    return {"registro": saved, "logro": logro}
