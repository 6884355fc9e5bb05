"""
Shared pytest fixtures for tasklist tests.

Every test that touches the store gets its own SQLite file under
``tmp_path``; nothing is shared between tests.

Usage:
    def test_something(store):
        ...
"""

from __future__ import annotations

import pytest

from tasklist.core.migrations import apply_migrations
from tasklist.core.settings import TaskListSettings
from tasklist.core.store import TaskStore
from tasklist.ops.context import OperationContext
from tasklist.sync.ports import LocalTaskBackend


@pytest.fixture()
def db_path(tmp_path) -> str:
    """Path of a fresh, not yet migrated database file."""
    return str(tmp_path / "tasks.db")


@pytest.fixture()
def migrated_db(db_path: str) -> str:
    """Path of a database with the schema applied."""
    result = apply_migrations(db_path)
    assert result.success, result.errors
    return db_path


@pytest.fixture()
def store(migrated_db: str) -> TaskStore:
    return TaskStore(migrated_db)


@pytest.fixture()
def broken_store(db_path: str) -> TaskStore:
    """Store whose database has no ``todos`` table, so every call fails."""
    return TaskStore(db_path)


@pytest.fixture()
def ctx(store: TaskStore) -> OperationContext:
    return OperationContext(store=store, caller="test")


@pytest.fixture()
def backend(store: TaskStore) -> LocalTaskBackend:
    return LocalTaskBackend(store, caller="test")


@pytest.fixture()
def settings(migrated_db: str) -> TaskListSettings:
    """Settings pointing at the migrated test database, no simulated latency."""
    return TaskListSettings(
        database_url=f"sqlite:///{migrated_db}",
        log_level="WARNING",
        log_json=True,
    )
