# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.persistence import PersistenceAdapter
from ..tasks.task_store import TaskStore
from .ports import Notifier


@dataclass
class AppState:
    # Settings object (config.Settings, or a SimpleNamespace in tests).
    settings: object

    store: TaskStore
    adapter: PersistenceAdapter
    notifier: Notifier

    # Current view: search term + structured filters, shared by /ls, /find and /filter.
    search_term: str | None = None
    area_filter: str | None = None
    min_points_filter: int | None = None
