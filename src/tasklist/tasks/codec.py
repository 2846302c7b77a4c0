# src/tasklist/tasks/codec.py

from __future__ import annotations

"""
Import/export of the task list as a portable JSON document.

Export is verbatim: the ordered list of task objects, pretty-printed.

Import:
- the top-level value must be an array (ImportFormatError otherwise;
  the store is not touched)
- elements without a usable string `text` are skipped, not fatal
- an element is skipped when its text OR its id already exists, either in
  the store or earlier in the same document
- accepted elements are appended through TaskStore.add, in document order
"""

import asyncio
import json
import logging
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import Any

from .errors import ImportFormatError
from .task_models import ImportResult, Task
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def export_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, indent=2)


def export_filename(day: date | None = None) -> str:
    day = day or date.today()
    return f"tasks-{day.isoformat()}.json"


def write_export(tasks: Iterable[Task], directory: str | Path, *, day: date | None = None) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(day)
    path.write_text(export_tasks(tasks) + "\n", "utf-8")
    logger.info("Exported tasks to %s", path)
    return path


def parse_document(raw: str | bytes) -> Any:
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8-sig")
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ImportFormatError(f"Invalid JSON file format: {e}") from e


def plan_import(document: Any, existing: Iterable[Task]) -> ImportResult:
    """Decide what an import would add, without touching any store."""
    if not isinstance(document, list):
        raise ImportFormatError(
            f"Invalid task format: expected a JSON array, got {type(document).__name__}"
        )

    texts: set[str] = set()
    ids: set[str] = set()
    for t in existing:
        texts.add(t.text)
        ids.add(t.id)

    result = ImportResult()
    for item in document:
        if not isinstance(item, dict) or not isinstance(item.get("text"), str):
            result.skipped_count += 1
            continue

        raw_id = item.get("id")
        if item["text"] in texts or (isinstance(raw_id, str) and raw_id in ids):
            result.skipped_count += 1
            continue

        task = Task.from_dict(item)
        if task is None:
            # blank text
            result.skipped_count += 1
            continue

        texts.add(task.text)
        ids.add(task.id)
        result.accepted.append(task)

    return result


def import_tasks(store: TaskStore, document: Any) -> ImportResult:
    result = plan_import(document, store.tasks)
    for task in result.accepted:
        store.add(
            task.text,
            completed=task.completed,
            id=task.id,
            points=task.points,
            area=task.area,
        )
    logger.info(
        "Import finished accepted=%d skipped=%d", result.accepted_count, result.skipped_count
    )
    return result


def import_text(store: TaskStore, raw: str | bytes) -> ImportResult:
    return import_tasks(store, parse_document(raw))


async def read_import_file(path: str | Path) -> bytes:
    return await asyncio.to_thread(Path(path).read_bytes)


async def import_file(store: TaskStore, path: str | Path) -> ImportResult:
    """Read off the event loop, then apply synchronously in one step."""
    raw = await read_import_file(path)
    return import_text(store, raw)
