"""
Task operations — the remote operations the UI invokes.

===========================  ==================================
Operation                    Result
===========================  ==================================
``list_tasks``               ``OperationResult[list[Task]]``
``add_task``                 ``OperationResult[Task]``
``delete_task``              ``OperationResult[None]``
``trigger_internal_error``   always ``InternalServerError``
``trigger_not_implemented``  always ``NotImplementedError``
===========================  ==================================

No exception crosses this boundary: store faults are classified and
returned as failed results.  Nothing is retried.
"""

from __future__ import annotations

import asyncio

from tasklist.core.errors import AppError, StorageError, classify
from tasklist.core.logging import get_logger
from tasklist.core.models import Task
from tasklist.ops.context import OperationContext
from tasklist.ops.result import OperationResult, start_timer

logger = get_logger(__name__)


async def list_tasks(ctx: OperationContext) -> OperationResult[list[Task]]:
    """Return every task ordered by id."""
    timer = start_timer()

    if "path" in ctx.metadata:
        logger.debug("list_tasks", path=ctx.metadata["path"], caller=ctx.caller)

    try:
        tasks = await ctx.store.list()
    except StorageError as exc:
        return _storage_failure("list_tasks", exc, timer.elapsed_ms)
    return OperationResult.ok(tasks, elapsed_ms=timer.elapsed_ms)


async def add_task(ctx: OperationContext, title: str) -> OperationResult[Task]:
    """Insert a task.  The title is stored as given."""
    timer = start_timer()

    await _simulate(ctx.latency.add_ms)
    try:
        task = await ctx.store.insert(title)
    except StorageError as exc:
        return _storage_failure("add_task", exc, timer.elapsed_ms)

    logger.info("task_added", task_id=task.id, caller=ctx.caller)
    return OperationResult.ok(task, elapsed_ms=timer.elapsed_ms)


async def delete_task(ctx: OperationContext, task_id: int) -> OperationResult[None]:
    """Delete a task.  Deleting an id that does not exist still succeeds."""
    timer = start_timer()

    try:
        removed = await ctx.store.delete(task_id)
    except StorageError as exc:
        return _storage_failure("delete_task", exc, timer.elapsed_ms)

    logger.info("task_deleted", task_id=task_id, removed=removed, caller=ctx.caller)
    return OperationResult.ok(None, elapsed_ms=timer.elapsed_ms, metadata={"removed": removed})


async def trigger_internal_error(ctx: OperationContext) -> OperationResult[None]:
    """Diagnostic: always fails with ``InternalServerError``."""
    timer = start_timer()
    await _simulate(ctx.latency.internal_error_ms)
    return OperationResult.fail(
        AppError.INTERNAL_SERVER_ERROR,
        "Generic Server Error",
        elapsed_ms=timer.elapsed_ms,
    )


async def trigger_not_implemented(ctx: OperationContext) -> OperationResult[None]:
    """Diagnostic: always fails with ``NotImplementedError``."""
    timer = start_timer()
    await _simulate(ctx.latency.not_implemented_ms)
    return OperationResult.fail(
        AppError.NOT_IMPLEMENTED,
        "Not Implemented Server Error",
        elapsed_ms=timer.elapsed_ms,
    )


# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #


async def _simulate(ms: int) -> None:
    if ms > 0:
        await asyncio.sleep(ms / 1000)


def _storage_failure(op: str, exc: StorageError, elapsed_ms: float) -> OperationResult:
    logger.error("op_failed", operation=op, **exc.to_dict())
    return OperationResult.fail(
        classify(exc),
        exc.message,
        elapsed_ms=elapsed_ms,
    )
