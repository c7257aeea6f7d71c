# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import re
from typing import Any, Dict, List, Optional

# Everything below 0x20 except \t, \n and \r, plus DEL
CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


def strip_control_chars(text: str) -> str:
    return CONTROL_CHARS_RE.sub("", text or "")


def build_chat_messages(history: Optional[List[Dict[str, Any]]], message: str) -> List[Dict[str, str]]:
    """Maps client history onto user/assistant turns and appends the new user message."""
    messages = []
    for item in history or []:
        role = "user" if item.get("role") == "user" else "assistant"
        messages.append({"role": role, "content": str(item.get("content") or "")})
    messages.append({"role": "user", "content": message})
    return messages


def normalize_alternation(messages: List[Dict[str, str]]) -> List[Dict[str, str]]:
    """
    The Messages API rejects two consecutive turns with the same role and a
    conversation that opens with the assistant. Consecutive same-role turns are
    merged with a newline and a leading assistant turn is dropped.
    """
    normalized: List[Dict[str, str]] = []
    for msg in messages:
        if normalized and normalized[-1]["role"] == msg["role"]:
            normalized[-1]["content"] += "\n" + msg["content"]
        else:
            normalized.append({"role": msg["role"], "content": msg["content"]})

    if normalized and normalized[0]["role"] != "user":
        normalized.pop(0)
    return normalized
