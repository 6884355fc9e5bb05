"""Settings for tasklist.

All values can be overridden via environment variables prefixed with
``TASKLIST_`` (``TASKLIST_DATABASE_URL``, ``TASKLIST_PORT``, ...) or a
``.env`` file.

Order of precedence (highest → lowest):
    1. Explicit keyword arguments (tests, ``create_app(settings=...)``)
    2. Environment variables
    3. ``.env`` file
    4. Defaults below
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tasklist.core.sqlite_conn import resolve_database_path

# Fake API delay used by ``tasklist serve --demo-latency``
DEMO_LATENCY_MS = {
    "add_latency_ms": 250,
    "internal_error_latency_ms": 1250,
    "not_implemented_latency_ms": 250,
}


class TaskListSettings(BaseSettings):
    """Process-wide configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TASKLIST_",
        env_file=".env",
        extra="ignore",
    )

    # ── Server ───────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3000, description="Bind port")
    debug: bool = Field(default=False, description="Expose exception text in 500 responses")
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool | None = Field(default=None, description="JSON logs (None = auto by TTY)")

    # ── API ──────────────────────────────────────────────────────────────
    api_prefix: str = Field(default="/api", description="URL prefix for all endpoints")
    api_title: str = Field(default="tasklist API", description="OpenAPI title")
    api_version: str = Field(default="0.1.0", description="OpenAPI version string")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = Field(
        default="sqlite:///Todos.db",
        description="SQLite URL or file path",
    )
    store_timeout: float = Field(default=5.0, description="Seconds to wait on a locked database")

    # ── Simulated latency (milliseconds) ─────────────────────────────────
    add_latency_ms: int = Field(default=0, ge=0)
    internal_error_latency_ms: int = Field(default=0, ge=0)
    not_implemented_latency_ms: int = Field(default=0, ge=0)

    @property
    def database_path(self) -> str:
        """Absolute SQLite file path (raises ``ConfigError`` for in-memory URLs)."""
        return resolve_database_path(self.database_url)

    def with_demo_latency(self) -> TaskListSettings:
        return self.model_copy(update=DEMO_LATENCY_MS)
