"""Schema migrations for the task database.

Every ``*.sql`` file in ``tasklist/core/schema/`` is applied once, in
filename order.  A script and its ``schema_migrations`` row commit in the
same transaction, so a script that fails part way leaves nothing behind
and is still pending on the next run.  The first failure ends the run.

Example::

    result = apply_migrations("/srv/tasklist/Todos.db")
    if not result.success:
        log.error("migrations_failed", errors=result.errors)
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from pathlib import Path

from tasklist.core.logging import get_logger
from tasklist.core.sqlite_conn import SqliteConnection

logger = get_logger(__name__)

SCHEMA_DIR = Path(__file__).resolve().parent.parent / "schema"

_LEDGER_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    name TEXT PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""


@dataclass
class MigrationResult:
    """Outcome of one :func:`apply_migrations` call.

    Attributes:
        applied: Scripts committed by this run, in order.
        skipped: Scripts found in ``schema_migrations`` already.
        errors: Script name → error text (at most one entry).
    """

    applied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.errors


def apply_migrations(path: str, schema_dir: Path | str | None = None) -> MigrationResult:
    """Open the database at *path*, apply pending scripts, close it again.

    Raises ``sqlite3.Error`` only when the database cannot be opened or the
    ledger table cannot be created; script failures land in
    :attr:`MigrationResult.errors`.
    """
    scripts = _scripts(Path(schema_dir) if schema_dir else SCHEMA_DIR)
    conn = SqliteConnection(path)
    try:
        done = _ledger(conn.raw)
        result = MigrationResult()
        for script in scripts:
            if script.name in done:
                result.skipped.append(script.name)
                continue
            try:
                _apply(conn.raw, script)
            except (sqlite3.Error, OSError) as exc:
                result.errors[script.name] = str(exc)
                logger.error("migration_failed", migration=script.name, error=str(exc))
                break
            result.applied.append(script.name)
            logger.info("migration_applied", migration=script.name)
        return result
    finally:
        conn.close()


def _scripts(schema_dir: Path) -> list[Path]:
    if not schema_dir.is_dir():
        return []
    return sorted(schema_dir.glob("*.sql"))


def _ledger(raw: sqlite3.Connection) -> set[str]:
    raw.execute(_LEDGER_DDL)
    raw.commit()
    return {row[0] for row in raw.execute("SELECT name FROM schema_migrations")}


def _apply(raw: sqlite3.Connection, script: Path) -> None:
    sql = script.read_text(encoding="utf-8")
    try:
        # executescript would commit an open transaction first; BEGIN goes in the script.
        raw.executescript(f"BEGIN;\n{sql}\n")
        raw.execute("INSERT INTO schema_migrations (name) VALUES (?)", (script.name,))
        raw.commit()
    except sqlite3.Error:
        if raw.in_transaction:
            raw.rollback()
        raise
