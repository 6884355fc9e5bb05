"""SQLite connection adapter and database URL parsing.

``SqliteConnection`` wraps a raw :class:`sqlite3.Connection` so that
``execute`` / ``fetchone`` / ``fetchall`` share one cursor, and
``resolve_database_path`` turns a settings URL into a file path.

Supported URL forms
-------------------
==========================  ==========================
Form                        Example
==========================  ==========================
``sqlite:///<path>``        ``sqlite:///Todos.db``
``sqlite:<path>``           ``sqlite:Todos.db``
``(file path)``             ``./data/todos.db``
==========================  ==========================

In-memory databases are rejected: every store call opens a fresh
connection, so an in-memory database would vanish between calls.

Usage::

    conn = SqliteConnection(resolve_database_path("sqlite:///Todos.db"))
    conn.execute("SELECT id, title, completed FROM todos")
    rows = conn.fetchall()
    conn.close()
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

from tasklist.core.errors import ConfigError

_MEMORY_TARGETS = ("", "memory", ":memory:")


def resolve_database_path(url: str) -> str:
    """Parse a database URL into an absolute SQLite file path.

    Raises:
        ConfigError: for in-memory URLs or non-SQLite schemes.
    """
    target = url.strip()
    if target.startswith("sqlite:///"):
        target = target[len("sqlite:///"):]
    elif target.startswith("sqlite://"):
        target = target[len("sqlite://"):]
    elif target.startswith("sqlite:"):
        target = target[len("sqlite:"):]
    elif "://" in target:
        scheme = target.split("://", 1)[0]
        raise ConfigError(f"Unsupported database scheme {scheme!r}; only sqlite is supported")

    if target in _MEMORY_TARGETS:
        raise ConfigError("In-memory SQLite cannot back the task store; use a file path")

    return str(Path(target).expanduser().resolve())


class SqliteConnection:
    """Adapter: ``sqlite3.Connection`` with connection-level fetch methods.

    Maintains a single cursor so that ``execute`` / ``fetchone`` /
    ``fetchall`` operate on the same result set.
    """

    def __init__(
        self,
        path: str,
        *,
        timeout: float = 5.0,
        row_factory: Any = sqlite3.Row,
    ) -> None:
        self._conn = sqlite3.connect(path, timeout=timeout, check_same_thread=False)
        self._conn.row_factory = row_factory
        self._cursor = self._conn.cursor()

    # -- Connection protocol -----------------------------------------------

    def execute(self, sql: str, params: tuple = ()) -> Any:
        self._cursor.execute(sql, params)
        return self._cursor

    def fetchone(self) -> Any:
        return self._cursor.fetchone()

    def fetchall(self) -> list:
        return self._cursor.fetchall()

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()

    def close(self) -> None:
        self._conn.close()

    # -- convenience -------------------------------------------------------

    @property
    def lastrowid(self) -> int | None:
        return self._cursor.lastrowid

    @property
    def rowcount(self) -> int:
        return self._cursor.rowcount

    @property
    def raw(self) -> sqlite3.Connection:
        """Access the underlying ``sqlite3.Connection`` (e.g. for ``executescript``)."""
        return self._conn

    def __repr__(self) -> str:
        return f"SqliteConnection({self._conn!r})"
