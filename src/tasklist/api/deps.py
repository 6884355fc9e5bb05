"""
FastAPI dependency injection — settings singleton and per-request context.

Usage in routers::

    from tasklist.api.deps import OpContext

    @router.get("/tasks")
    async def list_tasks(ctx: OpContext):
        ...
"""

from __future__ import annotations

import uuid
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from tasklist.core.settings import TaskListSettings
from tasklist.core.store import TaskStore
from tasklist.ops.context import OperationContext, SimulatedLatency

# ── Settings (singleton) ─────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_settings() -> TaskListSettings:
    """Cached settings — loaded once per process."""
    return TaskListSettings()


# ── Store (per-request handle; connections are per call) ────────────────


def get_store(settings: Annotated[TaskListSettings, Depends(get_settings)]) -> TaskStore:
    return TaskStore(settings.database_path, timeout=settings.store_timeout)


# ── Operation context (per-request) ──────────────────────────────────────


def get_operation_context(
    request: Request,
    store: Annotated[TaskStore, Depends(get_store)],
    settings: Annotated[TaskListSettings, Depends(get_settings)],
) -> OperationContext:
    """Build an :class:`OperationContext` from the current request."""
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    return OperationContext(
        store=store,
        request_id=request_id,
        caller="api",
        latency=SimulatedLatency.from_settings(settings),
        metadata={"path": request.url.path},
    )


# ── Convenience type aliases ─────────────────────────────────────────────

Settings = Annotated[TaskListSettings, Depends(get_settings)]
OpContext = Annotated[OperationContext, Depends(get_operation_context)]
