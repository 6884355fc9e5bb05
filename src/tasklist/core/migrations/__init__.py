"""Schema migrations for tasklist.

``apply_migrations(path)`` brings a database file up to date with the
scripts in ``core/schema/``; the API runs it at startup and the CLI
exposes it as ``tasklist db migrate``.
"""

from tasklist.core.migrations.runner import SCHEMA_DIR, MigrationResult, apply_migrations

__all__ = ["SCHEMA_DIR", "MigrationResult", "apply_migrations"]
