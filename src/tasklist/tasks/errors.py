# src/tasklist/tasks/errors.py

from __future__ import annotations


class TaskListError(Exception):
    """Base class for recoverable task-list errors."""


class PersistenceError(TaskListError):
    """Storage read/write failed (backend unavailable, quota, corrupt document)."""


class ImportFormatError(TaskListError):
    """Import document is not a JSON array of task objects."""
