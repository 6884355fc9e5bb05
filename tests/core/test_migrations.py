"""Tests for the schema migration runner."""

from __future__ import annotations

import sqlite3

import pytest

from tasklist.core.migrations import apply_migrations


def _tables(path: str) -> set[str]:
    conn = sqlite3.connect(path)
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        return {row[0] for row in rows}
    finally:
        conn.close()


@pytest.fixture()
def schema(tmp_path):
    directory = tmp_path / "schema"
    directory.mkdir()
    return directory


class TestApplyMigrations:
    def test_applies_schema(self, db_path):
        result = apply_migrations(db_path)
        assert result.success
        assert result.applied == ["0001_create_todos.sql"]

        conn = sqlite3.connect(db_path)
        try:
            cols = [row[1] for row in conn.execute("PRAGMA table_info(todos)")]
        finally:
            conn.close()
        assert cols == ["id", "title", "completed"]

    def test_second_run_skips(self, migrated_db):
        result = apply_migrations(migrated_db)
        assert result.success
        assert result.applied == []
        assert result.skipped == ["0001_create_todos.sql"]

    def test_completed_defaults_to_false(self, migrated_db):
        conn = sqlite3.connect(migrated_db)
        try:
            conn.execute("INSERT INTO todos (title) VALUES ('x')")
            assert conn.execute("SELECT completed FROM todos").fetchone()[0] == 0
        finally:
            conn.close()

    def test_filename_order(self, schema, tmp_path):
        (schema / "0002_b.sql").write_text("CREATE TABLE b (a_id INTEGER REFERENCES a (id));")
        (schema / "0001_a.sql").write_text("CREATE TABLE a (id INTEGER PRIMARY KEY);")

        result = apply_migrations(str(tmp_path / "m.db"), schema_dir=schema)
        assert result.applied == ["0001_a.sql", "0002_b.sql"]

    def test_failure_stops_the_run(self, schema, tmp_path):
        (schema / "0001_bad.sql").write_text("CREATE TABLE oops (;")
        (schema / "0002_ok.sql").write_text("CREATE TABLE ok (id INTEGER);")

        result = apply_migrations(str(tmp_path / "f.db"), schema_dir=schema)
        assert not result.success
        assert list(result.errors) == ["0001_bad.sql"]
        assert result.applied == []
        assert "ok" not in _tables(str(tmp_path / "f.db"))

    def test_failed_script_is_rolled_back_and_retried(self, schema, tmp_path):
        db = str(tmp_path / "r.db")
        script = schema / "0001_half.sql"
        script.write_text("CREATE TABLE first (id INTEGER);\nCREATE TABLE second (;")

        result = apply_migrations(db, schema_dir=schema)
        assert list(result.errors) == ["0001_half.sql"]
        assert "first" not in _tables(db)

        script.write_text("CREATE TABLE first (id INTEGER);\nCREATE TABLE second (id INTEGER);")
        result = apply_migrations(db, schema_dir=schema)
        assert result.applied == ["0001_half.sql"]
        assert {"first", "second"} <= _tables(db)

    def test_missing_schema_dir(self, tmp_path):
        result = apply_migrations(str(tmp_path / "e.db"), schema_dir=tmp_path / "nope")
        assert result.success
        assert result.applied == []
