"""
Backend port for the sync layer.

The dispatcher and synchronizer never touch the store directly; they talk
to a :class:`TaskBackend`, which is either in-process
(:class:`LocalTaskBackend`) or remote (``tasklist.sync.http.HttpTaskBackend``).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tasklist.core.models import Task
from tasklist.core.store import TaskStore
from tasklist.ops import tasks as task_ops
from tasklist.ops.context import OperationContext, SimulatedLatency
from tasklist.ops.result import OperationResult


@runtime_checkable
class TaskBackend(Protocol):
    """The three remote operations the sync layer depends on."""

    async def list_tasks(self) -> OperationResult[list[Task]]: ...

    async def add_task(self, title: str) -> OperationResult[Task]: ...

    async def delete_task(self, task_id: int) -> OperationResult[None]: ...


class LocalTaskBackend:
    """In-process backend: runs the ops functions against a :class:`TaskStore`."""

    def __init__(
        self,
        store: TaskStore,
        *,
        latency: SimulatedLatency | None = None,
        caller: str = "sdk",
    ) -> None:
        self.store = store
        self.latency = latency or SimulatedLatency()
        self.caller = caller

    def _ctx(self) -> OperationContext:
        return OperationContext(store=self.store, caller=self.caller, latency=self.latency)

    async def list_tasks(self) -> OperationResult[list[Task]]:
        return await task_ops.list_tasks(self._ctx())

    async def add_task(self, title: str) -> OperationResult[Task]:
        return await task_ops.add_task(self._ctx(), title)

    async def delete_task(self, task_id: int) -> OperationResult[None]:
        return await task_ops.delete_task(self._ctx(), task_id)
