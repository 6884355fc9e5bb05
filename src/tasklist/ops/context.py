"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument.  The context carries the task store, caller identity, simulated
latency and arbitrary metadata.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from tasklist.core.settings import TaskListSettings
from tasklist.core.store import TaskStore


@dataclass(frozen=True, slots=True)
class SimulatedLatency:
    """Artificial delays (milliseconds) applied before an operation answers."""

    add_ms: int = 0
    internal_error_ms: int = 0
    not_implemented_ms: int = 0

    @classmethod
    def from_settings(cls, settings: TaskListSettings) -> SimulatedLatency:
        return cls(
            add_ms=settings.add_latency_ms,
            internal_error_ms=settings.internal_error_latency_ms,
            not_implemented_ms=settings.not_implemented_latency_ms,
        )


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        store: The task store.
        request_id: Unique ID for this invocation (auto-generated).
        caller: Origin of the request — ``"api"``, ``"cli"``, ``"sdk"``.
        latency: Simulated latency to apply.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    store: TaskStore
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    latency: SimulatedLatency = field(default_factory=SimulatedLatency)
    metadata: dict[str, Any] = field(default_factory=dict)
