"""
Operations layer — transport-agnostic task operations.

Every function takes an :class:`OperationContext` and returns an
:class:`OperationResult`; the API and CLI are thin adapters over these.
"""

from tasklist.ops.context import OperationContext, SimulatedLatency
from tasklist.ops.result import OperationError, OperationResult
from tasklist.ops.tasks import (
    add_task,
    delete_task,
    list_tasks,
    trigger_internal_error,
    trigger_not_implemented,
)

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
    "SimulatedLatency",
    "add_task",
    "delete_task",
    "list_tasks",
    "trigger_internal_error",
    "trigger_not_implemented",
]
