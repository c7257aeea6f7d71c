# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Dict, List

import httpx

from conciencia.config import ANTHROPIC_API_URL, ANTHROPIC_VERSION

logger = logging.getLogger(__name__)


class ChatCompletionError(Exception):
    """Messages API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Claude error {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class EmptyCompletionError(Exception):
    pass


async def create_message(
    http: httpx.AsyncClient,
    api_key: str,
    model: str,
    system: str,
    messages: List[Dict[str, str]],
    max_tokens: int = 4096,
) -> str:
    """
    Single Messages API call. Returns the text of the first content block.
    Raises ChatCompletionError, EmptyCompletionError or httpx.HTTPError.
    """
    response = await http.post(
        ANTHROPIC_API_URL,
        headers={
            "Content-Type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        },
        json={
            "model": model,
            "max_tokens": max_tokens,
            "system": system,
            "messages": messages,
        },
    )

    if response.status_code >= 400:
        logger.error(f"[Claude] Error {response.status_code}: {response.text}")
        raise ChatCompletionError(response.status_code, response.text)

    data = response.json()
    blocks = data.get("content") if isinstance(data, dict) else None
    blocks = blocks if isinstance(blocks, list) else []
    text = blocks[0].get("text") if blocks and isinstance(blocks[0], dict) else None
    if not isinstance(text, str) or not text:
        logger.error(f"[Claude] Empty response: {data}")
        raise EmptyCompletionError("Empty response from Claude")
    return text
