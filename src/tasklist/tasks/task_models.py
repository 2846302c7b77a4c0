# src/tasklist/tasks/task_models.py

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


def new_task_id() -> str:
    """Millisecond timestamp (base 16) + random suffix; unique enough for one local list."""
    return f"{int(time.time() * 1000):x}{secrets.token_hex(5)}"


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def coerce_points(value: Any) -> int | None:
    """Integers (and integral floats) are scores; anything else is 'no score'."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


@dataclass(slots=True)
class Task:
    id: str
    text: str
    completed: bool = False

    # None is "no score", never zero.
    points: int | None = None
    area: str | None = None

    created_at: str | None = None
    completed_at: str | None = None

    @classmethod
    def from_dict(cls, raw: Any) -> Task | None:
        """
        Build a Task from a stored/imported object.

        Returns None when the element cannot be a task (not an object, or
        `text` missing / not a string / blank). Missing optional fields read
        as absent; a missing id gets a fresh one.
        """
        if not isinstance(raw, dict):
            return None
        text = raw.get("text")
        if not isinstance(text, str) or not text.strip():
            return None

        raw_id = raw.get("id")
        task_id = raw_id if isinstance(raw_id, str) and raw_id else new_task_id()

        area = raw.get("area")
        created_at = raw.get("createdAt")
        completed_at = raw.get("completedAt")

        return cls(
            id=task_id,
            text=text,
            completed=bool(raw.get("completed", False)),
            points=coerce_points(raw.get("points")),
            area=area if isinstance(area, str) else None,
            created_at=created_at if isinstance(created_at, str) else None,
            completed_at=completed_at if isinstance(completed_at, str) else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire shape shared by the storage document and the export file."""
        out: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "points": self.points,
        }
        if self.area is not None:
            out["area"] = self.area
        if self.created_at is not None:
            out["createdAt"] = self.created_at
        if self.completed_at is not None:
            out["completedAt"] = self.completed_at
        return out


class ViewState(StrEnum):
    """What a renderer should show for a filtered view."""

    EMPTY_STORE = "empty_store"
    NO_MATCHES = "no_matches"
    HAS_RESULTS = "has_results"


@dataclass(frozen=True, slots=True)
class Aggregates:
    total_count: int
    completed_count: int
    earned_points: int
    total_points: int
    progress_fraction: float

    @property
    def active_count(self) -> int:
        return self.total_count - self.completed_count


@dataclass(slots=True)
class ImportResult:
    accepted: list[Task] = field(default_factory=list)
    skipped_count: int = 0

    @property
    def accepted_count(self) -> int:
        return len(self.accepted)
