"""
Integration tests for the task endpoints using FastAPI TestClient.

These exercise the full router → ops → store path against a migrated
temporary SQLite file.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tasklist.api.app import create_app


@pytest.fixture()
def client(settings):
    with TestClient(create_app(settings=settings)) as c:
        yield c


class TestTaskEndpoints:
    def test_list_empty(self, client):
        resp = client.get("/api/tasks")
        assert resp.status_code == 200
        assert resp.json()["data"] == []

    def test_add(self, client):
        resp = client.post("/api/tasks", json={"title": "Buy milk"})
        assert resp.status_code == 201
        assert resp.json()["data"] == {"id": 1, "title": "Buy milk", "completed": False}

    def test_add_then_list_in_id_order(self, client):
        for title in ("a", "b", "c"):
            client.post("/api/tasks", json={"title": title})
        data = client.get("/api/tasks").json()["data"]
        assert [t["title"] for t in data] == ["a", "b", "c"]
        assert [t["id"] for t in data] == [1, 2, 3]

    def test_empty_title_is_accepted(self, client):
        resp = client.post("/api/tasks", json={"title": ""})
        assert resp.status_code == 201
        assert resp.json()["data"]["title"] == ""

    def test_missing_title_is_rejected(self, client):
        assert client.post("/api/tasks", json={}).status_code == 422

    def test_delete(self, client):
        client.post("/api/tasks", json={"title": "a"})
        resp = client.delete("/api/tasks/1")
        assert resp.status_code == 200
        assert resp.json()["data"] == {"id": 1, "removed": 1}
        assert client.get("/api/tasks").json()["data"] == []

    def test_delete_unknown_id(self, client):
        resp = client.delete("/api/tasks/77")
        assert resp.status_code == 200
        assert resp.json()["data"] == {"id": 77, "removed": 0}

    def test_delete_negative_id_is_rejected(self, client):
        assert client.delete("/api/tasks/-1").status_code == 422

    def test_delete_id_beyond_sqlite_integer(self, client):
        client.post("/api/tasks", json={"title": "a"})
        resp = client.delete(f"/api/tasks/{2**63}")
        assert resp.status_code == 200
        assert resp.json()["data"] == {"id": 2**63, "removed": 0}
        assert len(client.get("/api/tasks").json()["data"]) == 1

    def test_headers(self, client):
        resp = client.get("/api/tasks", headers={"X-Request-ID": "req-1"})
        assert resp.headers["X-Request-ID"] == "req-1"
        assert float(resp.headers["X-Process-Time-Ms"]) >= 0


class TestStoreFailure:
    def test_unopenable_database_is_500(self, tmp_path):
        from tasklist.core.settings import TaskListSettings

        # A directory cannot be opened as a database: migrations fail, the
        # server still starts, and the store calls answer 500.
        settings = TaskListSettings(_env_file=None, database_url=str(tmp_path), log_level="WARNING")
        with TestClient(create_app(settings=settings)) as client:
            assert client.app.state.migrated is False
            resp = client.get("/api/tasks")
            assert resp.status_code == 500
            body = resp.json()
            assert body["code"] == "InternalServerError"
            assert body["title"] == "Internal Server Error"
            assert resp.headers["content-type"].startswith("application/problem+json")
