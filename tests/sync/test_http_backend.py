"""
Tests for HttpTaskBackend against the real ASGI app (no network) and
against mocked transports for the failure mappings.
"""

from __future__ import annotations

import httpx
import pytest

from tasklist.api.app import create_app
from tasklist.core.errors import AppError
from tasklist.core.models import Task
from tasklist.sync.dispatcher import MutationDispatcher, SubmissionState
from tasklist.sync.http import HttpTaskBackend
from tasklist.sync.ports import TaskBackend
from tasklist.sync.synchronizer import QuerySynchronizer


@pytest.fixture()
def asgi_client(settings) -> httpx.AsyncClient:
    app = create_app(settings=settings)
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


def _mocked(handler) -> HttpTaskBackend:
    return HttpTaskBackend(
        httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
    )


class TestAgainstApp:
    @pytest.mark.asyncio
    async def test_round_trip(self, asgi_client):
        async with HttpTaskBackend(asgi_client) as api:
            assert isinstance(api, TaskBackend)
            assert (await api.list_tasks()).data == []

            added = await api.add_task("Buy milk")
            assert added.data == Task(id=1, title="Buy milk")

            assert (await api.list_tasks()).data == [added.data]
            assert (await api.delete_task(1)).success
            assert (await api.delete_task(1)).success
            assert (await api.list_tasks()).data == []

    @pytest.mark.asyncio
    async def test_diagnostics(self, asgi_client):
        async with HttpTaskBackend(asgi_client) as api:
            internal = await api.trigger_internal_error()
            assert internal.kind is AppError.INTERNAL_SERVER_ERROR
            assert internal.error.detail == "Generic Server Error"

            unimplemented = await api.trigger_not_implemented()
            assert unimplemented.kind is AppError.NOT_IMPLEMENTED
            assert unimplemented.error.details == {"status": 501}

    @pytest.mark.asyncio
    async def test_optimistic_flow_over_http(self, asgi_client):
        async with HttpTaskBackend(asgi_client) as api:
            dispatcher = MutationDispatcher(api)
            sync = QuerySynchronizer.for_dispatcher(dispatcher)
            try:
                sub = dispatcher.submit_add("Buy milk")
                assert sub.state is SubmissionState.PENDING
                await dispatcher.drain()

                view = (await sync.read()).data
                assert [t.title for t in view.tasks] == ["Buy milk"]
                assert view.pending == ()
            finally:
                sync.close()


class TestFailureMapping:
    @pytest.mark.asyncio
    async def test_not_found_status(self):
        api = _mocked(lambda request: httpx.Response(404, json={"detail": "No route"}))
        result = await api.list_tasks()
        assert result.kind is AppError.NOT_FOUND
        assert result.error.detail == "No route"
        await api.aclose()

    @pytest.mark.asyncio
    async def test_status_without_row_is_internal(self):
        api = _mocked(lambda request: httpx.Response(418, text="teapot"))
        result = await api.add_task("x")
        assert result.kind is AppError.INTERNAL_SERVER_ERROR
        assert result.error.details == {"status": 418}
        await api.aclose()

    @pytest.mark.asyncio
    async def test_transport_failure_is_internal(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        api = _mocked(refuse)
        result = await api.delete_task(1)
        assert result.kind is AppError.INTERNAL_SERVER_ERROR
        assert "connection refused" in result.error.detail
        await api.aclose()

    @pytest.mark.asyncio
    async def test_prefix_is_applied(self):
        seen: list[str] = []

        def record(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json={"data": [], "elapsed_ms": 0})

        api = HttpTaskBackend(
            httpx.AsyncClient(transport=httpx.MockTransport(record), base_url="http://test"),
            api_prefix="/v2/",
        )
        await api.list_tasks()
        await api.aclose()
        assert seen == ["/v2/tasks"]
