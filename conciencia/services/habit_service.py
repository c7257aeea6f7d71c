# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Any, Dict, Optional

from conciencia.services.supabase_client import SupabaseClient, eq

logger = logging.getLogger(__name__)


def next_streak(habit: Dict[str, Any]) -> Dict[str, int]:
    """Streak values after one more completed check-in."""
    racha_actual = (habit.get("racha_actual") or 0) + 1
    racha_maxima = max(habit.get("racha_maxima") or 0, racha_actual)
    return {"racha_actual": racha_actual, "racha_maxima": racha_maxima}


async def get_habit(backend: SupabaseClient, habit_id: str) -> Optional[Dict[str, Any]]:
    rows = await backend.select("habitos", filters={"id": eq(habit_id)}, limit=1)
    return rows[0] if rows else None


async def record_checkin(
    backend: SupabaseClient,
    habit: Dict[str, Any],
    checkin: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Stores the check-in; a completed one also advances the habit's streak.
    Returns {"checkin": ..., "habito": ...}.
    """
    saved = await backend.insert("checkins_habitos", {**checkin, "habito_id": habit["id"]})

    updated_habit = habit
    if checkin.get("completado"):
        streak = next_streak(habit)
        updated_habit = await backend.update("habitos", habit["id"], streak) or {**habit, **streak}
        logger.info(f"[Habitos] {habit['id']} streak -> {streak['racha_actual']}")

    return {"checkin": saved, "habito": updated_habit}
