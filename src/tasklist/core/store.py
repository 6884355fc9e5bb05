"""
Task store — CRUD over the ``todos`` table.

Every public call is a self-contained unit: open a connection, run one
transaction, commit (or roll back), close.  No connection outlives a call,
so concurrent callers interleave at call granularity and rely on SQLite's
own locking for isolation.

The blocking ``sqlite3`` work runs in a worker thread via
``asyncio.to_thread`` so the event loop only suspends on store I/O.  Once
started, a call runs to completion even if the awaiting task is cancelled.

Any ``sqlite3.Error`` (including failure to open the file) or parameter
``OverflowError`` surfaces as
:class:`~tasklist.core.errors.StorageError`.  Nothing is retried here.

Tags:
    tasklist, store, sqlite, crud, transactions
"""

from __future__ import annotations

import asyncio
import contextlib
import sqlite3
from collections.abc import Callable
from typing import TypeVar

from tasklist.core.errors import StorageError
from tasklist.core.logging import get_logger
from tasklist.core.models import Task
from tasklist.core.sqlite_conn import SqliteConnection, resolve_database_path

logger = get_logger(__name__)

T = TypeVar("T")

# Largest value a SQLite INTEGER column can hold; no row id can exceed it.
MAX_ROW_ID = 2**63 - 1


class TaskStore:
    """Async task store backed by a SQLite file.

    Example::

        store = TaskStore.from_url("sqlite:///Todos.db")
        task = await store.insert("Buy milk")
        tasks = await store.list()
        await store.delete(task.id)
    """

    def __init__(self, path: str, *, timeout: float = 5.0) -> None:
        self.path = path
        self.timeout = timeout

    @classmethod
    def from_url(cls, url: str, *, timeout: float = 5.0) -> TaskStore:
        return cls(resolve_database_path(url), timeout=timeout)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def list(self) -> list[Task]:
        """Return every task ordered by id ascending."""

        def _list(conn: SqliteConnection) -> list[Task]:
            conn.execute("SELECT id, title, completed FROM todos ORDER BY id ASC")
            return [Task.from_row(row) for row in conn.fetchall()]

        return await self._call("list", _list)

    async def insert(self, title: str) -> Task:
        """Insert a task and return it with its newly assigned id."""

        def _insert(conn: SqliteConnection) -> Task:
            conn.execute(
                "INSERT INTO todos (title, completed) VALUES (?, 0)",
                (title,),
            )
            return Task(id=int(conn.lastrowid), title=title, completed=False)

        task = await self._call("insert", _insert)
        logger.debug("task_inserted", task_id=task.id)
        return task

    async def delete(self, task_id: int) -> int:
        """Delete a task by id.  Returns the number of rows removed (0 or 1)."""
        if task_id < 0 or task_id > MAX_ROW_ID:
            logger.debug("task_deleted", task_id=task_id, rows=0)
            return 0

        def _delete(conn: SqliteConnection) -> int:
            conn.execute("DELETE FROM todos WHERE id = ?", (task_id,))
            return conn.rowcount

        removed = await self._call("delete", _delete)
        logger.debug("task_deleted", task_id=task_id, rows=removed)
        return removed

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _call(self, operation: str, fn: Callable[[SqliteConnection], T]) -> T:
        # Shielded so a cancelled caller does not abandon the worker thread's result.
        return await asyncio.shield(asyncio.to_thread(self._run, operation, fn))

    def _run(self, operation: str, fn: Callable[[SqliteConnection], T]) -> T:
        conn: SqliteConnection | None = None
        try:
            conn = SqliteConnection(self.path, timeout=self.timeout)
            result = fn(conn)
            conn.commit()
            return result
        except (sqlite3.Error, OverflowError) as exc:
            if conn is not None:
                with contextlib.suppress(sqlite3.Error):
                    conn.rollback()
            logger.warning("store_call_failed", operation=operation, error=str(exc))
            raise StorageError(
                f"Task store {operation} failed: {exc}",
                cause=exc,
                context={"operation": operation, "path": self.path},
            ) from exc
        finally:
            if conn is not None:
                conn.close()

    def __repr__(self) -> str:
        return f"TaskStore({self.path!r})"
