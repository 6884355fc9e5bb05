"""
Error taxonomy for tasklist.

Two layers live here:

- **AppError** — the closed set of failure kinds visible to callers.  Each
  kind has exactly one fixed message and one fixed HTTP status, taken from
  the tables below.  ``classify()`` reduces any failure to one of them.
- **TaskListError** — the exception hierarchy raised *inside* the process
  (store faults, bad configuration).  These never cross the ops boundary;
  they are classified first.

Manifesto:
    The status table is the only place a failure kind meets a status code.
    There is no default row: a kind without a status is a bug, so the
    module refuses to import until the row is added.

Architecture:
    ::

        ┌───────────────────────┬────────┬─────────────────────────┐
        │ AppError              │ Status │ Message                 │
        ├───────────────────────┼────────┼─────────────────────────┤
        │ NotFound              │  404   │ Not Found               │
        │ InternalServerError   │  500   │ Internal Server Error   │
        │ NotImplementedError   │  501   │ Not Implemented         │
        └───────────────────────┴────────┴─────────────────────────┘

        TaskListError
          ├── StorageError     (connection / query failure → 500)
          ├── ConfigError      (bad settings)
          └── AppErrorRaised   (carries an AppError kind)

Examples:
    >>> classify(StorageError("disk I/O error"))
    <AppError.INTERNAL_SERVER_ERROR: 'InternalServerError'>
    >>> status_for(AppError.NOT_FOUND)
    404

Tags:
    tasklist, errors, taxonomy, http-status, classification
"""

from __future__ import annotations

import builtins
from enum import Enum
from http import HTTPStatus
from typing import Any


class AppError(str, Enum):
    """Failure kinds visible at the remote-operation boundary."""

    NOT_FOUND = "NotFound"
    INTERNAL_SERVER_ERROR = "InternalServerError"
    NOT_IMPLEMENTED = "NotImplementedError"

    @property
    def status(self) -> int:
        return status_for(self)

    @property
    def message(self) -> str:
        return _MESSAGE_TABLE[self]


# ── Tables ───────────────────────────────────────────────────────────────
# One row per AppError.  Lookups index the dict directly (no .get default).

_STATUS_TABLE: dict[AppError, HTTPStatus] = {
    AppError.NOT_FOUND: HTTPStatus.NOT_FOUND,
    AppError.INTERNAL_SERVER_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
    AppError.NOT_IMPLEMENTED: HTTPStatus.NOT_IMPLEMENTED,
}

_MESSAGE_TABLE: dict[AppError, str] = {
    AppError.NOT_FOUND: "Not Found",
    AppError.INTERNAL_SERVER_ERROR: "Internal Server Error",
    AppError.NOT_IMPLEMENTED: "Not Implemented",
}


def _check_tables() -> None:
    for name, table in (("status", _STATUS_TABLE), ("message", _MESSAGE_TABLE)):
        missing = [kind.value for kind in AppError if kind not in table]
        if missing:
            raise RuntimeError(f"AppError {name} table has no row for: {', '.join(missing)}")
    statuses = [int(s) for s in _STATUS_TABLE.values()]
    if len(set(statuses)) != len(statuses):
        raise RuntimeError("AppError status table maps two kinds to the same status")


_check_tables()

_KIND_BY_STATUS: dict[int, AppError] = {int(status): kind for kind, status in _STATUS_TABLE.items()}


def status_for(kind: AppError) -> int:
    """Return the fixed HTTP status for *kind*.

    Raises ``KeyError`` for anything that is not an ``AppError`` row.
    """
    return int(_STATUS_TABLE[kind])


def from_status(status: int) -> AppError | None:
    """Reverse lookup: the kind whose fixed status is *status*, if any."""
    return _KIND_BY_STATUS.get(status)


# =============================================================================
# EXCEPTION HIERARCHY
# =============================================================================


class TaskListError(Exception):
    """Base class for errors raised inside tasklist.

    Attributes:
        message: Human-readable description.
        cause: Underlying exception, chained as ``__cause__``.
        context: Extra key/value pairs for logging.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class StorageError(TaskListError):
    """The task store could not connect or could not execute a statement."""

    pass


class ConfigError(TaskListError):
    """Invalid or unusable configuration."""

    pass


class AppErrorRaised(TaskListError):
    """Exception form of an :class:`AppError`, for paths that must raise."""

    def __init__(self, kind: AppError, detail: str | None = None):
        super().__init__(detail or kind.message)
        self.kind = kind


# =============================================================================
# CLASSIFIER
# =============================================================================


def classify(condition: AppError | BaseException | int) -> AppError:
    """Reduce a failure condition to its :class:`AppError` kind.

    Accepted conditions:
        - an ``AppError`` (returned unchanged)
        - an ``AppErrorRaised`` (its carried kind)
        - a ``StorageError`` → ``InternalServerError``
        - builtin ``NotImplementedError`` → ``NotImplementedError``
        - ``LookupError`` → ``NotFound``
        - an HTTP status code that has a table row
        - anything else → ``InternalServerError``
    """
    if isinstance(condition, AppError):
        return condition
    if isinstance(condition, AppErrorRaised):
        return condition.kind
    if isinstance(condition, StorageError):
        return AppError.INTERNAL_SERVER_ERROR
    if isinstance(condition, builtins.NotImplementedError):
        return AppError.NOT_IMPLEMENTED
    if isinstance(condition, LookupError):
        return AppError.NOT_FOUND
    if isinstance(condition, int) and not isinstance(condition, bool):
        kind = from_status(condition)
        if kind is not None:
            return kind
    return AppError.INTERNAL_SERVER_ERROR


__all__ = [
    "AppError",
    "AppErrorRaised",
    "ConfigError",
    "StorageError",
    "TaskListError",
    "classify",
    "from_status",
    "status_for",
]
