"""
HTTP backend — the sync layer's view of a remote tasklist API.

Maps every response back into the :class:`AppError` taxonomy:

- 2xx → ``OperationResult.ok`` with the ``data`` envelope payload
- a status with a table row (404/500/501) → that kind
- any other non-2xx status, or a transport failure → ``InternalServerError``

Usage::

    async with HttpTaskBackend.from_url("http://localhost:3000") as backend:
        result = await backend.list_tasks()
"""

from __future__ import annotations

from typing import Any

import httpx

from tasklist.core.errors import AppError, from_status
from tasklist.core.logging import get_logger
from tasklist.core.models import Task
from tasklist.ops.result import OperationResult, start_timer

logger = get_logger(__name__)


class HttpTaskBackend:
    """:class:`~tasklist.sync.ports.TaskBackend` over ``httpx.AsyncClient``."""

    def __init__(self, client: httpx.AsyncClient, *, api_prefix: str = "/api") -> None:
        self._client = client
        self._prefix = api_prefix.rstrip("/")

    @classmethod
    def from_url(
        cls,
        base_url: str,
        *,
        api_prefix: str = "/api",
        timeout: float | None = 10.0,
    ) -> HttpTaskBackend:
        return cls(httpx.AsyncClient(base_url=base_url, timeout=timeout), api_prefix=api_prefix)

    async def __aenter__(self) -> HttpTaskBackend:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Remote operations
    # ------------------------------------------------------------------

    async def list_tasks(self) -> OperationResult[list[Task]]:
        result = await self._request("GET", "/tasks")
        if not result.success:
            return result
        return OperationResult.ok(
            [Task.from_row(item) for item in result.data or []],
            elapsed_ms=result.elapsed_ms,
        )

    async def add_task(self, title: str) -> OperationResult[Task]:
        result = await self._request("POST", "/tasks", json={"title": title})
        if not result.success:
            return result
        return OperationResult.ok(Task.from_row(result.data), elapsed_ms=result.elapsed_ms)

    async def delete_task(self, task_id: int) -> OperationResult[None]:
        result = await self._request("DELETE", f"/tasks/{task_id}")
        if not result.success:
            return result
        return OperationResult.ok(None, elapsed_ms=result.elapsed_ms)

    async def trigger_internal_error(self) -> OperationResult[None]:
        return await self._request("POST", "/errors/internal")

    async def trigger_not_implemented(self) -> OperationResult[None]:
        return await self._request("POST", "/errors/not-implemented")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> OperationResult[Any]:
        timer = start_timer()
        try:
            response = await self._client.request(method, f"{self._prefix}{path}", **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("http_backend_transport_error", method=method, path=path, error=str(exc))
            return OperationResult.fail(
                AppError.INTERNAL_SERVER_ERROR,
                f"Transport failure: {exc}",
                elapsed_ms=timer.elapsed_ms,
            )

        body = _json_or_none(response)
        if response.is_success:
            data = body.get("data") if isinstance(body, dict) else None
            return OperationResult.ok(data, elapsed_ms=timer.elapsed_ms)

        kind = from_status(response.status_code) or AppError.INTERNAL_SERVER_ERROR
        detail = body.get("detail", "") if isinstance(body, dict) else ""
        return OperationResult.fail(
            kind,
            detail,
            details={"status": response.status_code},
            elapsed_ms=timer.elapsed_ms,
        )


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
