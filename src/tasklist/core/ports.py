# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps the storage technology and the feedback channel swappable and
makes testing easier.
"""

from typing import Literal, Protocol

NoticeLevel = Literal["info", "success", "error"]


class StorageBackend(Protocol):
    """
    Key-value storage (localStorage-style): string keys, string values.

    Implementations raise on failure (OSError, sqlite3.Error, ...);
    the persistence adapter turns that into PersistenceError.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...


class Notifier(Protocol):
    """User-facing feedback channel (toast, console line, ...)."""

    def notify(self, message: str, level: NoticeLevel = "info") -> None: ...
