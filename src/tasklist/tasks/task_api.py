# src/tasklist/tasks/task_api.py

from __future__ import annotations

from .task_models import Aggregates

BASE_POINTS = 5
MAX_LENGTH_BONUS = 10
COMPLEXITY_BONUS = 10
COMPLEXITY_KEYWORDS = (
    "implement",
    "design",
    "develop",
    "create",
    "build",
    "optimize",
    "analyze",
    "research",
)


def estimate_points(text: str) -> int:
    """
    Suggested effort score for a task text.

    5 base, +1 per 10 characters (max +10), +10 if a complexity keyword
    appears. Only a suggestion: callers pass it to TaskStore.add explicitly.
    """
    length_bonus = min(len(text) // 10, MAX_LENGTH_BONUS)
    lowered = text.lower()
    complexity = COMPLEXITY_BONUS if any(k in lowered for k in COMPLEXITY_KEYWORDS) else 0
    return BASE_POINTS + length_bonus + complexity


def progress_percent(agg: Aggregates) -> int:
    return round(agg.progress_fraction * 100)
