# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from fastapi import APIRouter, Depends

from conciencia.config import Settings, get_settings
from conciencia.dependencies import get_backend
from conciencia.services.supabase_client import BackendError, SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/healthz")
async def health_check(
    settings: Settings = Depends(get_settings),
    backend: SupabaseClient = Depends(get_backend),
):
    result = {
        "claude_key": bool(settings.anthropic_api_key),
        "embedding_key": bool(settings.gemini_api_key),
        "supabase_config": backend.is_configured,
        "supabase_connection": False,
    }

    if backend.is_configured:
        try:
            await backend.select("perfil_usuario", columns="id", limit=1)
            result["supabase_connection"] = True
        except BackendError as e:
            logger.warning(f"[Healthz] Supabase unreachable: {e}")

    return {
        "status": "ok" if all(result.values()) else "partial",
        "details": result,
    }
