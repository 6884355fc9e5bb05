"""Tests for the application factory and startup policy."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tasklist.api.app import create_app, run_startup_migrations
from tasklist.core.settings import TaskListSettings


class TestCreateApp:
    def test_migrations_run_at_startup(self, db_path):
        settings = TaskListSettings(_env_file=None, database_url=db_path, log_level="WARNING")
        with TestClient(create_app(settings=settings)) as client:
            assert client.app.state.migrated is True
            assert client.get("/api/tasks").status_code == 200

    def test_openapi_under_prefix(self, settings):
        with TestClient(create_app(settings=settings)) as client:
            resp = client.get("/api/openapi.json")
        assert resp.status_code == 200
        paths = resp.json()["paths"]
        assert "/api/tasks" in paths
        assert "/api/tasks/{task_id}" in paths
        assert "/api/errors/internal" in paths

    def test_custom_prefix(self, migrated_db):
        settings = TaskListSettings(
            _env_file=None, database_url=migrated_db, api_prefix="/v1", log_level="WARNING"
        )
        with TestClient(create_app(settings=settings)) as client:
            assert client.get("/v1/tasks").status_code == 200
            assert client.get("/api/tasks").status_code == 404


class TestStartupMigrations:
    def test_success(self, db_path):
        settings = TaskListSettings(_env_file=None, database_url=db_path)
        assert run_startup_migrations(settings) is True

    def test_in_memory_url_is_logged_not_raised(self):
        settings = TaskListSettings(_env_file=None, database_url="sqlite:///:memory:")
        assert run_startup_migrations(settings) is False

    def test_unopenable_database(self, tmp_path):
        settings = TaskListSettings(_env_file=None, database_url=str(tmp_path))
        assert run_startup_migrations(settings) is False
