# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from collections import Counter, defaultdict
from typing import Any, Dict, List

TOP_EMOTIONS = 10
INTENSITY_DAYS = 30


def _record_day(record: Dict[str, Any]):
    if record.get("fecha"):
        return str(record["fecha"])
    created_at = record.get("created_at")
    return str(created_at).split("T")[0] if created_at else None


def summarize_records(records: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Aggregates emotional records for the charts page:
    voice distribution, most frequent emotions and mean intensity per day.
    """
    voices = Counter(r.get("voz_identificada") or "ninguna_dominante" for r in records)

    emotions = Counter()
    for r in records:
        emotions.update(r.get("estado_emocional") or [])

    by_day = defaultdict(list)
    for r in records:
        day = _record_day(r)
        if day and r.get("intensidad_emocional") is not None:
            by_day[day].append(r["intensidad_emocional"])

    intensity = [
        {"fecha": day, "intensidad": round(sum(values) / len(values))}
        for day, values in sorted(by_day.items())
    ][-INTENSITY_DAYS:]

    return {
        "total_registros": len(records),
        "voces": dict(voices),
        "emociones": [
            {"emocion": name, "cantidad": count}
            for name, count in emotions.most_common(TOP_EMOTIONS)
        ],
        "intensidad_por_dia": intensity,
    }
