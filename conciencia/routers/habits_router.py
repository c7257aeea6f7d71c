# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, HTTPException, Query

from conciencia.dependencies import require_backend
from conciencia.schemas.journal_schemas import CheckinCreate, HabitCreate, HabitUpdate
from conciencia.services.habit_service import get_habit, record_checkin
from conciencia.services.supabase_client import SupabaseClient, eq

router = APIRouter(prefix="/api/habitos", tags=["Habitos"])

CHECKIN_HISTORY_LIMIT = 30


@router.get("")
async def list_habits(
    user_id: str = Query(...),
    solo_activos: bool = Query(False),
    backend: SupabaseClient = Depends(require_backend),
):
    filters = {"user_id": eq(user_id)}
    if solo_activos:
        filters["activo"] = "eq.true"

    # metas(titulo) embeds the linked goal's title
    return await backend.select(
        "habitos",
        columns="*,metas(titulo)",
        filters=filters,
        order="created_at.desc",
    )


@router.post("", status_code=201)
async def create_habit(payload: HabitCreate, backend: SupabaseClient = Depends(require_backend)):
    return await backend.insert("habitos", payload.model_dump())


@router.patch("/{habit_id}")
async def update_habit(habit_id: str, payload: HabitUpdate, backend: SupabaseClient = Depends(require_backend)):
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="Nothing to update")

    updated = await backend.update("habitos", habit_id, changes)
    if not updated:
        raise HTTPException(status_code=404, detail="Habit not found")
    return updated


@router.delete("/{habit_id}")
async def delete_habit(habit_id: str, backend: SupabaseClient = Depends(require_backend)):
    if not await backend.delete("habitos", habit_id):
        raise HTTPException(status_code=404, detail="Habit not found")
    return {"message": "Hábito eliminado", "id": habit_id}


# -------------------------
# Check-ins
# -------------------------

@router.get("/{habit_id}/checkins")
async def list_checkins(habit_id: str, backend: SupabaseClient = Depends(require_backend)):
    return await backend.select(
        "checkins_habitos",
        filters={"habito_id": eq(habit_id)},
        order="fecha.desc",
        limit=CHECKIN_HISTORY_LIMIT,
    )


@router.post("/{habit_id}/checkins", status_code=201)
async def create_checkin(
    habit_id: str,
    payload: CheckinCreate,
    backend: SupabaseClient = Depends(require_backend),
):
    habit = await get_habit(backend, habit_id)
    if not habit:
        raise HTTPException(status_code=404, detail="Habit not found")

    return await record_checkin(backend, habit, payload.model_dump(exclude_none=True))
