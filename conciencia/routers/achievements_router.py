# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, Query

from conciencia.dependencies import require_backend
from conciencia.schemas.journal_schemas import AchievementCreate
from conciencia.services.supabase_client import SupabaseClient, eq

router = APIRouter(prefix="/api/logros", tags=["Logros"])


@router.get("")
async def list_achievements(
    user_id: str = Query(...),
    limit: int = Query(50, ge=1, le=500),
    backend: SupabaseClient = Depends(require_backend),
):
    return await backend.select(
        "logros",
        filters={"user_id": eq(user_id)},
        order="created_at.desc",
        limit=limit,
    )


@router.post("", status_code=201)
async def create_achievement(payload: AchievementCreate, backend: SupabaseClient = Depends(require_backend)):
    # Logged by hand from the UI, as opposed to detected by the model
    return await backend.insert("logros", {**payload.model_dump(), "fuente": "explicito"})
