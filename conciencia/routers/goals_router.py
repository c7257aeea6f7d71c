# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, HTTPException, Query

from conciencia.dependencies import require_backend
from conciencia.schemas.journal_schemas import GoalCreate, GoalUpdate
from conciencia.services.supabase_client import SupabaseClient, eq

router = APIRouter(prefix="/api/metas", tags=["Metas"])


@router.get("")
async def list_goals(user_id: str = Query(...), backend: SupabaseClient = Depends(require_backend)):
    return await backend.select(
        "metas",
        filters={"user_id": eq(user_id)},
        order="created_at.desc",
    )


@router.post("", status_code=201)
async def create_goal(payload: GoalCreate, backend: SupabaseClient = Depends(require_backend)):
    return await backend.insert("metas", payload.model_dump())


@router.patch("/{goal_id}")
async def update_goal(goal_id: str, payload: GoalUpdate, backend: SupabaseClient = Depends(require_backend)):
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="Nothing to update")

    updated = await backend.update("metas", goal_id, changes)
    if not updated:
        raise HTTPException(status_code=404, detail="Goal not found")
    return updated


@router.delete("/{goal_id}")
async def delete_goal(goal_id: str, backend: SupabaseClient = Depends(require_backend)):
    if not await backend.delete("metas", goal_id):
        raise HTTPException(status_code=404, detail="Goal not found")
    return {"message": "Meta eliminada", "id": goal_id}
