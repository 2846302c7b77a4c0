# tests/test_bootstrap.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.cli.bootstrap import create_backend, create_initial_state
from tasklist.config import Settings
from tasklist.storage.backends import JsonFileBackend, MemoryBackend, SqliteBackend
from tasklist.tasks.task_api import estimate_points, progress_percent
from tasklist.tasks.task_models import Aggregates

from .fakes import RecordingNotifier


def test_bootstrap_round_trip_across_sessions(settings: SimpleNamespace) -> None:
    first = create_initial_state(settings=settings, notifier=RecordingNotifier())
    first.store.add("persisted", points=4)

    second = create_initial_state(settings=settings, notifier=RecordingNotifier())
    assert [t.text for t in second.store.tasks] == ["persisted"]
    assert second.store.tasks[0].points == 4


def test_bootstrap_corrupt_storage_starts_empty(settings: SimpleNamespace) -> None:
    JsonFileBackend(settings.storage_path).set(settings.storage_key, "{corrupt")
    notifier = RecordingNotifier()

    state = create_initial_state(settings=settings, notifier=notifier)

    assert len(state.store) == 0
    assert notifier.notices[0].level == "error"


def test_bootstrap_corrupt_storage_file_notifies_and_keeps_backup(
    settings: SimpleNamespace,
) -> None:
    Path(settings.storage_path).write_text("{truncated", "utf-8")
    notifier = RecordingNotifier()

    state = create_initial_state(settings=settings, notifier=notifier)
    assert len(state.store) == 0
    assert [(n.message, n.level) for n in notifier.notices] == [("Failed to load tasks", "error")]

    state.store.add("new")
    backups = list(Path(settings.data_dir).glob("storage.json.corrupt-*"))
    assert [b.read_text("utf-8") for b in backups] == ["{truncated"]
    reloaded = create_initial_state(settings=settings, notifier=RecordingNotifier())
    assert [t.text for t in reloaded.store.tasks] == ["new"]


@pytest.mark.parametrize(
    "kind,cls",
    [("memory", MemoryBackend), ("json", JsonFileBackend), ("sqlite", SqliteBackend)],
)
def test_create_backend(settings: SimpleNamespace, kind: str, cls: type) -> None:
    settings.storage_backend = kind
    assert isinstance(create_backend(settings), cls)


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKLIST_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKLIST_STORAGE_BACKEND", "SQLite")
    monkeypatch.delenv("TASKLIST_STORAGE_PATH", raising=False)
    monkeypatch.delenv("TASKLIST_STORAGE_KEY", raising=False)
    monkeypatch.delenv("TASKLIST_EXPORT_DIR", raising=False)
    monkeypatch.setenv("TASKLIST_CONSOLE_LOG", "yes")

    s = Settings.from_env()
    assert s.storage_backend == "sqlite"
    assert s.storage_path == tmp_path / "storage.sqlite3"
    assert s.storage_key == "taskListApp_tasks"
    assert s.export_dir == tmp_path / "exports"
    assert s.console_log is True


def test_settings_unknown_backend_falls_back_to_json(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKLIST_STORAGE_BACKEND", "redis")
    assert Settings.from_env().storage_backend == "json"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Call", 5),
        ("Water the plants today", 7),
        ("Research options", 5 + 1 + 10),
        ("x" * 500, 15),
    ],
)
def test_estimate_points(text: str, expected: int) -> None:
    assert estimate_points(text) == expected


def test_progress_percent() -> None:
    agg = Aggregates(
        total_count=3, completed_count=1, earned_points=0, total_points=0, progress_fraction=1 / 3
    )
    assert progress_percent(agg) == 33
