# src/tasklist/cli/commands.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from ..core.state import AppState
from ..tasks import query
from ..tasks.codec import import_file, write_export
from ..tasks.errors import ImportFormatError
from ..tasks.task_api import estimate_points, progress_percent
from ..tasks.task_models import Task, ViewState

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."
        return handler(state, parts[1:])

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def resolve_ref(state: AppState, ref: str) -> Task | None:
    """1-based position in the full list, an exact id, or a unique id prefix."""
    tasks = state.store.tasks
    if ref.isdigit():
        pos = int(ref)
        return tasks[pos - 1] if 1 <= pos <= len(tasks) else None

    exact = state.store.get(ref)
    if exact is not None:
        return exact
    matches = [t for t in tasks if t.id.startswith(ref)]
    return matches[0] if len(matches) == 1 else None


def format_task(pos: int, task: Task) -> str:
    mark = "x" if task.completed else " "
    pts = f" ({task.points} pts)" if task.points is not None else ""
    area = f" [{task.area}]" if task.area else ""
    return f"{pos:>3}. [{mark}] {task.text}{pts}{area}  #{task.id}"


def _render(state: AppState, tasks: list[Task]) -> str:
    visible = query.visible_ids(
        tasks,
        state.search_term,
        area_prefix=state.area_filter,
        min_points=state.min_points_filter,
    )
    vs = query.view_state(state.store.tasks, visible)
    if vs is ViewState.EMPTY_STORE:
        return "No tasks yet. Add one with /add <text>."
    if vs is ViewState.NO_MATCHES:
        return "No tasks found. Try a different search term or /filter clear."

    positions = {t.id: i for i, t in enumerate(state.store.tasks, start=1)}
    return "\n".join(format_task(positions[t.id], t) for t in tasks if t.id in visible)


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add [--points N] [--area NAME] [--estimate] text...
    """
    points: int | None = None
    area: str | None = None
    estimate = False
    words: list[str] = []

    it = iter(args)
    for a in it:
        if a == "--points":
            raw = next(it, "")
            try:
                points = int(raw)
            except ValueError:
                return f"Invalid points value: {raw!r}"
        elif a == "--area":
            area = next(it, "").strip() or None
        elif a == "--estimate":
            estimate = True
        else:
            words.append(a)

    text = " ".join(words).strip()
    if not text:
        return "Usage: /add [--points N] [--area NAME] [--estimate] <text>"
    if estimate and points is None:
        points = estimate_points(text)

    task = state.store.add(text, points=points, area=area)
    return f"Task added: {task.text}"


def cmd_done(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /done <number|id>"
    task = resolve_ref(state, args[0])
    if task is None:
        return f"Task {args[0]} not found."
    state.store.toggle_completion(task.id)
    return "Task completed!" if task.completed else "Task reopened."


def cmd_rm(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /rm <number|id>"
    task = resolve_ref(state, args[0])
    if task is None:
        return f"Task {args[0]} not found."
    state.store.delete(task.id)
    return f"Task deleted: {task.text}"


def cmd_mv(state: AppState, args: list[str]) -> str:
    """
    /mv FROM TO   (1-based; TO = count puts it last)
    """
    if len(args) != 2 or not all(a.isdigit() for a in args):
        return "Usage: /mv <from> <to>"
    src, dst = int(args[0]) - 1, int(args[1]) - 1
    if not state.store.move(src, dst):
        return "Nothing to move."
    return _render(state, list(state.store.tasks))


def cmd_ls(state: AppState, args: list[str]) -> str:
    sub = args[0].lower() if args else "all"
    if sub in ("active", "todo"):
        tasks = state.store.active()
    elif sub in ("done", "completed"):
        tasks = state.store.completed()
    else:
        tasks = list(state.store.tasks)
    return _render(state, tasks)


def cmd_find(state: AppState, args: list[str]) -> str:
    state.search_term = " ".join(args).strip() or None
    return _render(state, list(state.store.tasks))


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter area=NAME min=N
    /filter clear
    """
    if not args:
        min_pts = "-" if state.min_points_filter is None else state.min_points_filter
        return (
            f"Filters: area={state.area_filter or '-'} min={min_pts}\n"
            "Usage: /filter area=<text> min=<points> | /filter clear"
        )
    if args[0].lower() == "clear":
        state.area_filter = None
        state.min_points_filter = None
        state.search_term = None
        return "Filters cleared."

    for a in args:
        key, _, value = a.partition("=")
        key = key.lower()
        if key == "area":
            state.area_filter = value.strip() or None
        elif key == "min":
            if not value:
                state.min_points_filter = None
                continue
            try:
                state.min_points_filter = int(value)
            except ValueError:
                return f"Invalid min points: {value!r}"
        else:
            return f"Unknown filter: {key}. Use area=<text> or min=<points>."
    return _render(state, list(state.store.tasks))


def cmd_stats(state: AppState, args: list[str]) -> str:
    agg = state.store.aggregates()
    return (
        "Progress:\n"
        f"  Completed: {agg.completed_count}/{agg.total_count} ({progress_percent(agg)}%)\n"
        f"  Active: {agg.active_count}\n"
        f"  Points: {agg.earned_points}/{agg.total_points}"
    )


def cmd_export(state: AppState, args: list[str]) -> str:
    directory = args[0] if args else getattr(state.settings, "export_dir", ".")
    try:
        path = write_export(state.store.tasks, directory)
    except OSError as e:
        logger.exception("Export failed dir=%s", directory)
        return f"Export failed: {e}"
    return f"Tasks exported to {path}"


def cmd_import(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /import <path.json>"
    try:
        result = asyncio.run(import_file(state.store, args[0]))
    except OSError as e:
        return f"Could not read {args[0]}: {e}"
    except ImportFormatError as e:
        logger.info("Import rejected path=%s: %s", args[0], e)
        return str(e)

    if result.accepted_count:
        msg = f"Imported {result.accepted_count} tasks successfully!"
    else:
        msg = "No new tasks to import."
    if result.skipped_count:
        msg += f" Skipped {result.skipped_count}."
    return msg


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add [--points N] [--area NAME] [--estimate] <text>."
)
registry.register("done", cmd_done, help_text="Toggle completion: /done <number|id>.", aliases=["toggle"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <number|id>.", aliases=["delete"])
registry.register("mv", cmd_mv, help_text="Reorder: /mv <from> <to> (to = count for last).")
registry.register("ls", cmd_ls, help_text="List tasks: /ls [all|active|done].", aliases=["list"])
registry.register("find", cmd_find, help_text="Search by text: /find <term> (empty clears).")
registry.register(
    "filter", cmd_filter, help_text="Filter: /filter area=<text> min=<points> | /filter clear."
)
registry.register("stats", cmd_stats, help_text="Show progress and points.")
registry.register("export", cmd_export, help_text="Export to tasks-<date>.json: /export [dir].")
registry.register("import", cmd_import, help_text="Import a JSON export: /import <path>.")
