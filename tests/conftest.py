# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.core.state import AppState
from tasklist.storage.backends import MemoryBackend
from tasklist.tasks.persistence import PersistenceAdapter
from tasklist.tasks.task_store import TaskStore

from .fakes import RecordingNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        data_dir=tmp_path,
        storage_backend="json",
        storage_path=tmp_path / "storage.json",
        storage_key="taskListApp_tasks",
        export_dir=tmp_path / "exports",
    )


@pytest.fixture()
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture()
def adapter(backend: MemoryBackend) -> PersistenceAdapter:
    return PersistenceAdapter(backend)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def store(adapter: PersistenceAdapter, notifier: RecordingNotifier) -> TaskStore:
    return TaskStore(adapter, notifier=notifier)


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    store: TaskStore,
    adapter: PersistenceAdapter,
    notifier: RecordingNotifier,
) -> AppState:
    return AppState(settings=settings, store=store, adapter=adapter, notifier=notifier)
