# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, HTTPException, Query

from conciencia.dependencies import require_backend
from conciencia.schemas.journal_schemas import RecordCreate
from conciencia.services.achievement_service import save_record_with_achievement
from conciencia.services.summary_service import summarize_records
from conciencia.services.supabase_client import SupabaseClient, eq

router = APIRouter(prefix="/api/registros", tags=["Registros"])


@router.get("")
async def list_records(
    user_id: str = Query(...),
    limit: int = Query(50, ge=1, le=500),
    backend: SupabaseClient = Depends(require_backend),
):
    return await backend.select(
        "registros_emocionales",
        filters={"user_id": eq(user_id)},
        order="created_at.desc",
        limit=limit,
    )


@router.get("/resumen")
async def records_summary(
    user_id: str = Query(...),
    limit: int = Query(200, ge=1, le=1000),
    backend: SupabaseClient = Depends(require_backend),
):
    """Voice distribution, top emotions and daily intensity for the charts page."""
    records = await backend.select(
        "registros_emocionales",
        columns="voz_identificada,estado_emocional,intensidad_emocional,fecha,created_at",
        filters={"user_id": eq(user_id)},
        order="created_at.desc",
        limit=limit,
    )
    return summarize_records(records)


@router.post("", status_code=201)
async def create_record(payload: RecordCreate, backend: SupabaseClient = Depends(require_backend)):
    return await save_record_with_achievement(backend, payload.model_dump())


@router.delete("/{record_id}")
async def delete_record(record_id: str, backend: SupabaseClient = Depends(require_backend)):
    if not await backend.delete("registros_emocionales", record_id):
        raise HTTPException(status_code=404, detail="Record not found")
    return {"message": "Registro eliminado", "id": record_id}
