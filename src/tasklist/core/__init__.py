"""
Core primitives: task model, store, error taxonomy, logging, settings.

Nothing in ``tasklist.core`` knows about HTTP or the CLI.
"""

from tasklist.core.errors import (
    AppError,
    AppErrorRaised,
    ConfigError,
    StorageError,
    TaskListError,
    classify,
    from_status,
    status_for,
)
from tasklist.core.models import Task
from tasklist.core.store import TaskStore

__all__ = [
    "AppError",
    "AppErrorRaised",
    "ConfigError",
    "StorageError",
    "Task",
    "TaskListError",
    "TaskStore",
    "classify",
    "from_status",
    "status_for",
]
