# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the storage backend,
- loads the saved list (falling back to empty on a corrupt document),
- wires store + adapter + notifier into AppState.
"""

from __future__ import annotations

import logging
from datetime import datetime

from ..config import get_settings
from ..core.ports import NoticeLevel, Notifier, StorageBackend
from ..core.state import AppState
from ..storage.backends import JsonFileBackend, MemoryBackend, SqliteBackend
from ..tasks.persistence import PersistenceAdapter
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

_LEVEL_TAGS = {"info": "", "success": "[OK] ", "error": "[ERROR] "}


class ConsoleNotifier:
    """Prints user feedback lines with a local timestamp."""

    def notify(self, message: str, level: NoticeLevel = "info") -> None:
        ts = datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")
        print(f"[{ts}] {_LEVEL_TAGS.get(level, '')}{message}")


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_backend(settings) -> StorageBackend:
    kind = getattr(settings, "storage_backend", "json")
    if kind == "memory":
        return MemoryBackend()
    if kind == "sqlite":
        return SqliteBackend(settings.storage_path)
    return JsonFileBackend(settings.storage_path)


def create_initial_state(*, settings=None, notifier: Notifier | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    if notifier is None:
        notifier = ConsoleNotifier()

    _ensure_local_dirs(settings)

    adapter = PersistenceAdapter(create_backend(settings), key=settings.storage_key)
    tasks, err = adapter.load_or_empty()
    if err is not None:
        notifier.notify("Failed to load tasks", "error")

    store = TaskStore(adapter, notifier=notifier, tasks=tasks)
    logger.info(
        "TaskStore ready backend=%s key=%s total=%d",
        getattr(settings, "storage_backend", "json"),
        settings.storage_key,
        len(store),
    )
    return AppState(settings=settings, store=store, adapter=adapter, notifier=notifier)
