# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException

from conciencia.dependencies import require_backend
from conciencia.schemas.journal_schemas import ProfileUpdate
from conciencia.services.supabase_client import SupabaseClient

router = APIRouter(prefix="/api/perfil", tags=["Perfil"])


@router.get("")
async def get_profile(backend: SupabaseClient = Depends(require_backend)):
    # Single-user app: the first profile row is the user
    rows = await backend.select("perfil_usuario", limit=1)
    if not rows:
        raise HTTPException(status_code=404, detail="Profile not found")
    return rows[0]


@router.patch("/{profile_id}")
async def update_profile(
    profile_id: str,
    payload: ProfileUpdate,
    backend: SupabaseClient = Depends(require_backend),
):
    changes = payload.model_dump(exclude_unset=True)
    changes["datos_actualizados_at"] = datetime.now(timezone.utc).isoformat()

    updated = await backend.update("perfil_usuario", profile_id, changes)
    if not updated:
        raise HTTPException(status_code=404, detail="Profile not found")
    return updated
