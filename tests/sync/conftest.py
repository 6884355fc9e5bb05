"""Fixtures for the sync layer: a backend whose calls can be held open."""

from __future__ import annotations

import asyncio

import pytest

from tasklist.core.errors import AppError
from tasklist.core.models import Task
from tasklist.ops.result import OperationResult
from tasklist.sync.dispatcher import MutationDispatcher
from tasklist.sync.ports import LocalTaskBackend
from tasklist.sync.synchronizer import QuerySynchronizer


class GatedBackend:
    """Wraps a real backend; ``hold(title)`` parks that add until released."""

    def __init__(self, inner: LocalTaskBackend) -> None:
        self.inner = inner
        self.gates: dict[str, asyncio.Event] = {}
        self.fail_adds: set[str] = set()
        self.fail_lists = False

    def hold(self, title: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[title] = gate
        return gate

    async def list_tasks(self) -> OperationResult[list[Task]]:
        if self.fail_lists:
            return OperationResult.fail(AppError.INTERNAL_SERVER_ERROR, "list unavailable")
        return await self.inner.list_tasks()

    async def add_task(self, title: str) -> OperationResult[Task]:
        gate = self.gates.get(title)
        if gate is not None:
            await gate.wait()
        if title in self.fail_adds:
            return OperationResult.fail(AppError.INTERNAL_SERVER_ERROR, "add rejected")
        return await self.inner.add_task(title)

    async def delete_task(self, task_id: int) -> OperationResult[None]:
        return await self.inner.delete_task(task_id)


@pytest.fixture()
def gated(backend: LocalTaskBackend) -> GatedBackend:
    return GatedBackend(backend)


@pytest.fixture()
def dispatcher(gated: GatedBackend) -> MutationDispatcher:
    return MutationDispatcher(gated)


@pytest.fixture()
def sync(dispatcher: MutationDispatcher):
    synchronizer = QuerySynchronizer.for_dispatcher(dispatcher)
    yield synchronizer
    synchronizer.close()
