# src/tasklist/tasks/persistence.py

from __future__ import annotations

"""
Persistence adapter: the task list <-> one JSON document in a key-value backend.

Saving is best-effort: failures are logged and returned, never raised, and
the in-memory list stays the source of truth. Loading raises
PersistenceError for a corrupt document so the caller can decide to start
empty.
"""

import json
import logging
from collections.abc import Iterable

from ..core.ports import StorageBackend
from .errors import PersistenceError
from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "taskListApp_tasks"


class PersistenceAdapter:
    def __init__(self, backend: StorageBackend, *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._backend = backend
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def save(self, tasks: Iterable[Task]) -> PersistenceError | None:
        payload = [t.to_dict() for t in tasks]
        try:
            doc = json.dumps(payload, ensure_ascii=False)
            self._backend.set(self._key, doc)
        except Exception as e:
            logger.exception("Failed to save %d tasks under key=%s", len(payload), self._key)
            return PersistenceError(f"Failed to save tasks: {e}")
        logger.debug("Saved %d tasks under key=%s", len(payload), self._key)
        return None

    def load(self) -> list[Task]:
        try:
            raw = self._backend.get(self._key)
        except Exception as e:
            raise PersistenceError(f"Failed to read tasks: {e}") from e

        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Stored tasks are not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise PersistenceError(
                f"Stored tasks must be a JSON array, got {type(data).__name__}"
            )

        out: list[Task] = []
        seen: set[str] = set()
        for i, item in enumerate(data):
            task = Task.from_dict(item)
            if task is None:
                logger.warning("Skipping malformed stored task at index %d", i)
                continue
            if task.id in seen:
                logger.warning("Skipping stored task with duplicate id=%s", task.id)
                continue
            seen.add(task.id)
            out.append(task)

        logger.info("Loaded %d tasks from key=%s", len(out), self._key)
        return out

    def load_or_empty(self) -> tuple[list[Task], PersistenceError | None]:
        """Startup path: never blocks the app on a bad document."""
        try:
            return self.load(), None
        except PersistenceError as e:
            logger.warning("Falling back to an empty task list: %s", e)
            return [], e
