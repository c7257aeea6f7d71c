# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, Query

from conciencia.dependencies import require_backend
from conciencia.schemas.journal_schemas import ConversationCreate
from conciencia.services.supabase_client import SupabaseClient, eq

router = APIRouter(prefix="/api/conversaciones", tags=["Conversaciones"])


@router.get("")
async def list_conversations(
    user_id: str = Query(...),
    limit: int = Query(30, ge=1, le=200),
    backend: SupabaseClient = Depends(require_backend),
):
    return await backend.select(
        "conversaciones",
        filters={"user_id": eq(user_id)},
        order="updated_at.desc",
        limit=limit,
    )


@router.post("", status_code=201)
async def create_conversation(payload: ConversationCreate, backend: SupabaseClient = Depends(require_backend)):
    return await backend.insert("conversaciones", payload.model_dump())


@router.get("/{conversation_id}/mensajes")
async def list_messages(conversation_id: str, backend: SupabaseClient = Depends(require_backend)):
    return await backend.select(
        "mensajes_chat",
        filters={"conversacion_id": eq(conversation_id)},
        order="created_at.asc",
    )
