# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
import httpx

from conciencia.config import Settings, get_settings
from conciencia.dependencies import get_backend, get_http_client
from conciencia.schemas.chat_schemas import ChatRequest
from conciencia.services.chat_relay import relay_chat
from conciencia.services.supabase_client import SupabaseClient
from conciencia.utils.rate_limit_utils import chat_rate_limit, limiter


router = APIRouter(prefix="/api", tags=["Chat"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@router.options("/chat")
async def chat_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/chat")
@limiter.limit(chat_rate_limit)
async def chat_with_conciencia(
    request: Request,
    payload: ChatRequest,
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(get_http_client),
    backend: SupabaseClient = Depends(get_backend),
):
    """
    Always answers 200 once the request is well-formed; upstream trouble is
    reported inside respuesta_conversacional and analisis.contexto.
    """
    if not settings.anthropic_api_key:
        return JSONResponse(
            status_code=500,
            content={"error": "ANTHROPIC_API_KEY not configured"},
            headers=CORS_HEADERS,
        )

    if not payload.message:
        return JSONResponse(
            status_code=400,
            content={"error": "message is required"},
            headers=CORS_HEADERS,
        )

    reply = await relay_chat(payload, settings, http, backend)
    return JSONResponse(status_code=200, content=reply, headers=CORS_HEADERS)
