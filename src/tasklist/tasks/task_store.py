# src/tasklist/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from ..core.ports import Notifier
from .errors import PersistenceError
from .persistence import PersistenceAdapter
from .task_models import Aggregates, Task, new_task_id, utc_now_iso

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Ordered, in-memory task list.

    - list order is the display/priority order
    - ids are unique; toggle/delete address tasks by id, never by position
    - every mutation is followed by a save attempt; a failed save is reported
      (logger + notifier) and the in-memory list stays authoritative
    """

    def __init__(
        self,
        adapter: PersistenceAdapter | None = None,
        *,
        notifier: Notifier | None = None,
        tasks: Iterable[Task] | None = None,
    ) -> None:
        self._adapter = adapter
        self._notifier = notifier
        self._tasks: list[Task] = []
        self.last_error: PersistenceError | None = None
        if tasks is not None:
            self.replace_all(tasks)

    # ---- reads ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def index_of(self, task_id: str) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return -1

    def active(self) -> list[Task]:
        return [t for t in self._tasks if not t.completed]

    def completed(self) -> list[Task]:
        return [t for t in self._tasks if t.completed]

    def aggregates(self) -> Aggregates:
        total = len(self._tasks)
        done = 0
        earned = 0
        total_points = 0
        for t in self._tasks:
            if t.completed:
                done += 1
            if t.points is None:
                continue
            total_points += t.points
            if t.completed:
                earned += t.points
        return Aggregates(
            total_count=total,
            completed_count=done,
            earned_points=earned,
            total_points=total_points,
            progress_fraction=(done / total) if total else 0.0,
        )

    # ---- mutations ----

    def add(
        self,
        text: str,
        completed: bool = False,
        id: str | None = None,
        points: int | None = None,
        area: str | None = None,
    ) -> Task:
        if not isinstance(text, str) or not text.strip():
            raise ValueError("text is required")
        if id is not None and self.get(id) is not None:
            raise ValueError(f"duplicate task id: {id}")

        task_id = id or new_task_id()
        while id is None and self.get(task_id) is not None:
            task_id = new_task_id()

        now = utc_now_iso()
        task = Task(
            id=task_id,
            text=text,
            completed=bool(completed),
            points=points,
            area=area,
            created_at=now,
            completed_at=now if completed else None,
        )
        self._tasks.append(task)
        logger.debug("Task added id=%s points=%s area=%s", task.id, points, area)
        self._persist()
        return task

    def toggle_completion(self, task_id: str) -> Task | None:
        task = self.get(task_id)
        if task is None:
            logger.debug("toggle_completion: unknown id=%s", task_id)
            return None
        task.completed = not task.completed
        task.completed_at = utc_now_iso() if task.completed else None
        logger.debug("Task toggled id=%s completed=%s", task.id, task.completed)
        self._persist()
        return task

    def delete(self, task_id: str) -> Task | None:
        idx = self.index_of(task_id)
        if idx < 0:
            logger.debug("delete: unknown id=%s", task_id)
            return None
        task = self._tasks.pop(idx)
        logger.debug("Task deleted id=%s", task.id)
        self._persist()
        return task

    def move(self, from_index: int, to_index: int) -> bool:
        """
        Remove the task at from_index and reinsert it so it ends up at to_index.

        to_index is the final position (0..len-1); len is accepted as "after
        the last task" and lands at len-1. Same or out-of-range indices are a
        no-op.

            [A, B, C].move(2, 0) -> [C, A, B]
            [A, B, C].move(0, 2) -> [B, C, A]
            [A, B, C].move(0, 1) -> [B, A, C]
        """
        n = len(self._tasks)
        if not (0 <= from_index < n) or not (0 <= to_index <= n):
            logger.debug("move out of range from=%s to=%s len=%s", from_index, to_index, n)
            return False
        insert_at = min(to_index, n - 1)
        if insert_at == from_index:
            return False

        task = self._tasks.pop(from_index)
        self._tasks.insert(insert_at, task)
        self._persist()
        return True

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """Seed the list (startup load). Duplicate ids keep the first occurrence; no save."""
        seen: set[str] = set()
        fresh: list[Task] = []
        for t in tasks:
            if t.id in seen:
                logger.warning("replace_all: dropping duplicate id=%s", t.id)
                continue
            seen.add(t.id)
            fresh.append(t)
        self._tasks = fresh

    # ---- persistence ----

    def save(self) -> PersistenceError | None:
        if self._adapter is None:
            return None
        err = self._adapter.save(self._tasks)
        self.last_error = err
        return err

    def _persist(self) -> None:
        err = self.save()
        if err is None:
            return
        logger.warning("Task list kept in memory only: %s", err)
        if self._notifier is not None:
            self._notifier.notify("Failed to save tasks", "error")
