# tests/test_commands.py

from __future__ import annotations

import json
from pathlib import Path

from tasklist.cli.commands import CommandRegistry, registry, resolve_ref


def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    calls: list[list[str]] = []

    def handler(state, args):
        calls.append(args)
        return "ok"

    reg.register("a", handler, "a", aliases=["alpha"])

    assert reg.handle(state, "/a x y") == "ok"
    assert reg.handle(state, "/ALPHA") == "ok"
    assert calls == [["x", "y"], []]
    assert "/a - a" in reg.build_help()


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_with_options(state) -> None:
    reply = registry.handle(state, "/add --points 8 --area work Ship release")
    assert reply == "Task added: Ship release"

    task = state.store.tasks[0]
    assert (task.text, task.points, task.area) == ("Ship release", 8, "work")


def test_add_estimate_and_validation(state) -> None:
    registry.handle(state, "/add --estimate Implement parser")
    assert state.store.tasks[0].points == 5 + 1 + 10

    assert "Usage" in (registry.handle(state, "/add --points 3") or "")
    assert "Invalid points" in (registry.handle(state, "/add --points many x") or "")
    assert len(state.store) == 1


def test_done_rm_and_refs(state) -> None:
    for text in ("A", "B", "C"):
        registry.handle(state, f"/add {text}")
    b = state.store.tasks[1]

    assert resolve_ref(state, "2") is b
    assert resolve_ref(state, b.id) is b
    assert resolve_ref(state, "9") is None

    assert registry.handle(state, "/done 2") == "Task completed!"
    assert b.completed is True
    assert registry.handle(state, f"/done {b.id}") == "Task reopened."

    assert registry.handle(state, "/rm 1") == "Task deleted: A"
    assert [t.text for t in state.store.tasks] == ["B", "C"]
    assert "not found" in (registry.handle(state, "/rm 7") or "")


def test_mv_uses_one_based_slots(state) -> None:
    for text in ("A", "B", "C"):
        registry.handle(state, f"/add {text}")

    registry.handle(state, "/mv 3 1")
    assert [t.text for t in state.store.tasks] == ["C", "A", "B"]

    registry.handle(state, "/mv 1 4")
    assert [t.text for t in state.store.tasks] == ["A", "B", "C"]

    assert registry.handle(state, "/mv 2 2") == "Nothing to move."

    registry.handle(state, "/mv 1 2")
    assert [t.text for t in state.store.tasks] == ["B", "A", "C"]

    registry.handle(state, "/mv 1 3")
    assert [t.text for t in state.store.tasks] == ["A", "C", "B"]


def test_find_filter_and_empty_states(state) -> None:
    assert "No tasks yet" in (registry.handle(state, "/ls") or "")

    registry.handle(state, "/add --area home --points 2 Buy milk")
    registry.handle(state, "/add --area work --points 9 Write report")

    out = registry.handle(state, "/find milk") or ""
    assert "Buy milk" in out and "Write report" not in out

    assert "No tasks found" in (registry.handle(state, "/find zzz") or "")

    registry.handle(state, "/find")
    out = registry.handle(state, "/filter min=5") or ""
    assert "Write report" in out and "Buy milk" not in out

    out = registry.handle(state, "/filter area=HOME min=") or ""
    assert "Buy milk" in out and "Write report" not in out

    assert registry.handle(state, "/filter clear") == "Filters cleared."
    assert state.area_filter is None and state.min_points_filter is None


def test_ls_active_and_done(state) -> None:
    registry.handle(state, "/add A")
    registry.handle(state, "/add B")
    registry.handle(state, "/done 1")

    active = registry.handle(state, "/ls active") or ""
    done = registry.handle(state, "/ls done") or ""
    assert "B" in active and "] A" not in active
    assert "[x] A" in done


def test_stats(state) -> None:
    registry.handle(state, "/add --points 5 Buy milk")
    registry.handle(state, "/add --points 20 Write report")
    registry.handle(state, "/done 1")

    out = registry.handle(state, "/stats") or ""
    assert "Completed: 1/2 (50%)" in out
    assert "Points: 5/25" in out


def test_export_then_import(state, tmp_path: Path) -> None:
    registry.handle(state, "/add --points 3 A")
    out = registry.handle(state, f"/export {tmp_path}") or ""
    assert out.startswith("Tasks exported to")

    exported = next(tmp_path.glob("tasks-*.json"))
    assert json.loads(exported.read_text("utf-8"))[0]["text"] == "A"

    # same list again: everything is a duplicate
    assert (
        registry.handle(state, f"/import {exported}")
        == "No new tasks to import. Skipped 1."
    )

    fresh = tmp_path / "fresh.json"
    fresh.write_text(json.dumps([{"text": "B"}, {"text": "A"}]), "utf-8")
    assert registry.handle(state, f"/import {fresh}") == "Imported 1 tasks successfully! Skipped 1."


def test_import_errors(state, tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text('{"text": "object"}', "utf-8")

    assert "expected a JSON array" in (registry.handle(state, f"/import {bad}") or "")
    assert "Could not read" in (registry.handle(state, f"/import {tmp_path / 'nope.json'}") or "")
    assert len(state.store) == 0


def test_ls_done_without_completed_tasks_is_no_matches(state) -> None:
    registry.handle(state, "/add open task")

    out = registry.handle(state, "/ls done") or ""
    assert "No tasks found" in out
    assert "No tasks yet" not in out


def test_import_non_utf8_file_is_rejected(state, tmp_path: Path) -> None:
    bad = tmp_path / "latin.json"
    bad.write_bytes(b"[\xff\xfe]")

    out = registry.handle(state, f"/import {bad}") or ""
    assert "Invalid JSON file format" in out
    assert len(state.store) == 0
