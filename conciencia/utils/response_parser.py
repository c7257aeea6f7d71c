# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import json
import logging
import re
from typing import Any, Dict, Optional

from conciencia.utils.message_utils import strip_control_chars

logger = logging.getLogger(__name__)

FALLBACK_TEXT_LIMIT = 500
FALLBACK_REPLY = "Perdón, no pude armar bien mi respuesta. ¿Me lo repetís?"

GREEDY_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
REPLY_FIELD_RE = re.compile(r'"respuesta_conversacional"\s*:\s*"([\s\S]*?)(?:(?<!\\)"|$)')

_STRING_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}


def empty_analysis(contexto: Optional[str]) -> Dict[str, Any]:
    return {
        "estado_emocional": [],
        "intensidad_emocional": 0,
        "voz_identificada": "ninguna_dominante",
        "pensamiento_automatico": None,
        "distorsion_cognitiva": [],
        "contexto": contexto,
        "pensamiento_alternativo": None,
        "modo_respuesta": "escucha",
        "tarea_vinculada": None,
        "tecnica_aplicada": "ninguna",
        "estado_animo": None,
        "sintomas_fisicos": [],
        "logro_detectado": None,
        "recomendacion": None,
    }


def escape_newlines_in_strings(text: str) -> str:
    """Escapes raw newlines/tabs that the model left inside JSON string literals."""
    out = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            elif ch in _STRING_ESCAPES:
                out.append(_STRING_ESCAPES[ch])
                continue
        elif ch == '"':
            in_string = True
        out.append(ch)
    return "".join(out)


def _reject_constant(name: str):
    # NaN / Infinity are not valid JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def _loads_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _extract_object(text: str) -> Optional[Dict[str, Any]]:
    match = GREEDY_OBJECT_RE.search(text)
    if not match:
        return None

    parsed = _loads_object(match.group(0))
    if parsed is not None:
        return parsed

    # Greedy match spans several objects or trailing junk: try each opening brace
    decoder = json.JSONDecoder(parse_constant=_reject_constant)
    for brace in re.finditer(r"\{", text):
        try:
            candidate, _ = decoder.raw_decode(text, brace.start())
        except ValueError:
            continue
        if isinstance(candidate, dict):
            return candidate
    return None


def _extract_reply_field(text: str) -> Optional[str]:
    match = REPLY_FIELD_RE.search(text)
    if not match or not match.group(1).strip():
        return None
    raw = match.group(1)
    try:
        return json.loads(f'"{raw}"')
    except ValueError:
        return raw


def parse_model_output(text: str) -> Dict[str, Any]:
    """
    Turns the model's text into the {respuesta_conversacional, analisis} object.

    1. strict JSON
    2. first decodable {...} inside the text
    3. the respuesta_conversacional field pulled out by regex
    4. the raw text itself
    Tiers 3 and 4 are truncated and paired with a default analysis.
    """
    cleaned = escape_newlines_in_strings(strip_control_chars(text))

    parsed = _loads_object(cleaned)
    if parsed is not None:
        return parsed

    parsed = _extract_object(cleaned)
    if parsed is not None:
        logger.warning("[Parser] Model output had text around the JSON object")
        return parsed

    logger.warning(f"[Parser] Could not parse model output: {cleaned[:200]!r}")
    reply = _extract_reply_field(cleaned) or strip_control_chars(text).strip() or FALLBACK_REPLY
    return {
        "respuesta_conversacional": reply[:FALLBACK_TEXT_LIMIT],
        "analisis": empty_analysis("Error de parsing"),
    }
