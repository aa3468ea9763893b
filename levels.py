# Level adapter: next difficulty from the last few answers.

from __future__ import annotations

from typing import Sequence

from models import HistoryEntry

MIN_LEVEL = 1
MAX_LEVEL = 10

RECENT_WINDOW = 5
PROMOTE_RATIO = 0.8
PROMOTE_MAX_AVG_SECONDS = 10
DEMOTE_RATIO = 0.5
DEMOTE_MIN_AVG_SECONDS = 20


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(level, MAX_LEVEL))


def next_level(history: Sequence[HistoryEntry]) -> int:
    """
    Compute the level for the next question from ``history`` alone.

    The current level is the one recorded on the last entry. Over the last
    (up to) five entries: a high hit rate answered quickly moves up one, a
    low hit rate or slow answers move down one, otherwise the level stays.
    """
    if not history:
        raise ValueError("next_level needs at least one history entry")

    recent = list(history[-RECENT_WINDOW:])
    correct_ratio = sum(1 for h in recent if h.correct) / len(recent)
    avg_time = sum(h.time_taken_seconds for h in recent) / len(recent)
    current = history[-1].level

    if correct_ratio >= PROMOTE_RATIO and avg_time < PROMOTE_MAX_AVG_SECONDS:
        return clamp_level(current + 1)
    if correct_ratio < DEMOTE_RATIO or avg_time > DEMOTE_MIN_AVG_SECONDS:
        return clamp_level(current - 1)
    return clamp_level(current)
