"""Tests for database URL resolution and the SqliteConnection adapter."""

from __future__ import annotations

from pathlib import Path

import pytest

from tasklist.core.errors import ConfigError
from tasklist.core.sqlite_conn import SqliteConnection, resolve_database_path


class TestResolveDatabasePath:
    def test_relative_url(self):
        assert resolve_database_path("sqlite:///Todos.db") == str(Path("Todos.db").resolve())

    def test_absolute_url(self, tmp_path):
        target = tmp_path / "x.db"
        assert resolve_database_path(f"sqlite:///{target}") == str(target.resolve())

    def test_bare_path(self, tmp_path):
        target = tmp_path / "y.db"
        assert resolve_database_path(str(target)) == str(target.resolve())

    @pytest.mark.parametrize(
        "url",
        ["sqlite:///:memory:", ":memory:", "sqlite://", "sqlite:///", "", "   "],
    )
    def test_in_memory_rejected(self, url):
        with pytest.raises(ConfigError):
            resolve_database_path(url)

    def test_other_schemes_rejected(self):
        with pytest.raises(ConfigError, match="postgresql"):
            resolve_database_path("postgresql://localhost/tasks")


class TestSqliteConnection:
    def test_execute_and_fetch(self, tmp_path):
        conn = SqliteConnection(str(tmp_path / "c.db"))
        try:
            conn.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, name TEXT)")
            conn.execute("INSERT INTO t (name) VALUES (?)", ("a",))
            assert conn.lastrowid == 1
            conn.commit()
            conn.execute("SELECT id, name FROM t")
            row = conn.fetchone()
            assert row["name"] == "a"
            conn.execute("DELETE FROM t WHERE id = ?", (1,))
            assert conn.rowcount == 1
        finally:
            conn.close()
