# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Any, Dict

import httpx

from conciencia.config import Settings
from conciencia.schemas.chat_schemas import ChatRequest
from conciencia.services.claude_service import ChatCompletionError, EmptyCompletionError, create_message
from conciencia.services.conversation_service import save_chat_turn
from conciencia.services.embedding_service import generate_embedding
from conciencia.services.memory_service import get_recent_achievements, load_memory_context
from conciencia.services.supabase_client import SupabaseClient
from conciencia.utils.message_utils import build_chat_messages, normalize_alternation, strip_control_chars
from conciencia.utils.prompt_templates import build_system_prompt, resolve_mode
from conciencia.utils.response_parser import empty_analysis, parse_model_output

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    429: "Límite de uso alcanzado. Esperá unos minutos.",
    401: "Problema con la clave de API.",
}
GENERIC_STATUS_MESSAGE = "Tuve un problema técnico."


def upstream_error_reply(status_code: int) -> Dict[str, Any]:
    user_msg = STATUS_MESSAGES.get(status_code, GENERIC_STATUS_MESSAGE)
    return {
        "respuesta_conversacional": f"⚠️ {user_msg} (Error {status_code})",
        "analisis": empty_analysis(f"Error HTTP {status_code}"),
        "embedding": None,
    }


def technical_error_reply(error: Exception) -> Dict[str, Any]:
    return {
        "respuesta_conversacional": f"Perdón, tuve un problema técnico. ({error}). ¿Podés repetirlo?",
        "analisis": empty_analysis("Error de API"),
        "embedding": None,
    }


async def relay_chat(
    payload: ChatRequest,
    settings: Settings,
    http: httpx.AsyncClient,
    backend: SupabaseClient,
) -> Dict[str, Any]:
    """
    embed -> similarity search -> recent fallback -> compose prompt -> Claude -> parse.
    Every upstream failure degrades in-band; the caller always gets a reply dict.
    """
    clean_message = strip_control_chars(payload.message)
    modo = resolve_mode(payload.modo)

    # 🧠 Memory
    embedding = await generate_embedding(http, clean_message, settings.gemini_api_key)
    similar_records, recent_records = await load_memory_context(backend, embedding, payload.userId)
    achievements = await get_recent_achievements(backend, payload.userId)

    logger.info(
        f"[Chat] modo={modo} embedding={'yes' if embedding else 'no'} "
        f"similar={len(similar_records)} recent={len(recent_records)} logros={len(achievements)}"
    )

    system_prompt = build_system_prompt(
        modo,
        similar_records,
        recent_records,
        payload.activeHabits,
        achievements,
    )

    history = [m.model_dump() for m in payload.history or []]
    messages = normalize_alternation(build_chat_messages(history, clean_message))

    # 🤖 Claude
    try:
        text = await create_message(
            http,
            settings.anthropic_api_key,
            settings.claude_model,
            system_prompt,
            messages,
            max_tokens=settings.max_tokens,
        )
    except ChatCompletionError as e:
        return upstream_error_reply(e.status_code)
    except (httpx.HTTPError, EmptyCompletionError, ValueError) as e:
        logger.error(f"[Chat] Claude call failed: {e}")
        return technical_error_reply(e)

    reply = parse_model_output(text)
    reply["embedding"] = embedding

    # 💾 Conversation history
    await save_chat_turn(backend, payload.conversacionId, clean_message, reply)

    return reply
