# src/tasklist/tasks/query.py

from __future__ import annotations

"""
Read-only views over a task sequence.

Nothing here reorders or mutates tasks: callers get id sets (or the visible
tasks in their original order) and decide how to render them.
"""

from collections.abc import Iterable, Sequence

from .task_models import Task, ViewState


def _norm(s: str | None) -> str:
    return (s or "").strip().lower()


def search(tasks: Iterable[Task], term: str | None) -> set[str]:
    """Case-insensitive substring match on text; a blank term matches everything."""
    needle = _norm(term)
    if not needle:
        return {t.id for t in tasks}
    return {t.id for t in tasks if needle in t.text.lower()}


def filter_by_fields(
    tasks: Iterable[Task],
    *,
    area_prefix: str | None = None,
    min_points: int | None = None,
) -> set[str]:
    """
    Structured filters, ANDed.

    area_prefix: contained in the task's trimmed, lowercased area.
                 Blank/None matches all; tasks without an area fail it.
    min_points:  task.points is not None and >= min_points.
    """
    area_needle = _norm(area_prefix)
    out: set[str] = set()
    for t in tasks:
        if area_needle and (t.area is None or area_needle not in _norm(t.area)):
            continue
        if min_points is not None and (t.points is None or t.points < min_points):
            continue
        out.add(t.id)
    return out


def visible_ids(
    tasks: Sequence[Task],
    term: str | None = None,
    *,
    area_prefix: str | None = None,
    min_points: int | None = None,
) -> set[str]:
    return search(tasks, term) & filter_by_fields(
        tasks, area_prefix=area_prefix, min_points=min_points
    )


def visible_tasks(
    tasks: Sequence[Task],
    term: str | None = None,
    *,
    area_prefix: str | None = None,
    min_points: int | None = None,
) -> list[Task]:
    ids = visible_ids(tasks, term, area_prefix=area_prefix, min_points=min_points)
    return [t for t in tasks if t.id in ids]


def view_state(tasks: Sequence[Task], visible: Iterable[str]) -> ViewState:
    if not tasks:
        return ViewState.EMPTY_STORE
    if not set(visible):
        return ViewState.NO_MATCHES
    return ViewState.HAS_RESULTS
