"""
FastAPI application factory.

``create_app()`` wires middleware, routers, error handlers, and lifespan
events into a single ``FastAPI`` instance.

Startup policy: migrations are applied before the first request is
served.  A migration failure is logged and the server starts anyway; the
affected endpoints then answer 500 until the database is fixed.
"""

from __future__ import annotations

import sqlite3
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasklist.api.deps import get_settings
from tasklist.api.middleware.errors import not_found_exception_handler, unhandled_exception_handler
from tasklist.api.middleware.request_id import RequestIDMiddleware
from tasklist.api.middleware.timing import TimingMiddleware
from tasklist.core.errors import TaskListError
from tasklist.core.logging import configure_logging, get_logger
from tasklist.core.migrations import apply_migrations
from tasklist.core.settings import TaskListSettings


def run_startup_migrations(settings: TaskListSettings) -> bool:
    """Apply pending migrations; log and return ``False`` on any failure."""
    log = get_logger("tasklist.api")
    try:
        result = apply_migrations(settings.database_path)
    except (TaskListError, sqlite3.Error, OSError) as exc:
        log.error("migrations_not_run", error=str(exc), database_url=settings.database_url)
        return False

    if not result.success:
        log.error("migrations_failed", errors=result.errors, applied=result.applied)
        return False
    log.info("migrations_complete", applied=result.applied, skipped=len(result.skipped))
    return True


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan — startup / shutdown hooks."""
    settings: TaskListSettings = app.state.settings
    configure_logging(level=settings.log_level, json_format=settings.log_json)

    log = get_logger("tasklist.api")
    log.info("tasklist API starting", version=app.version)
    app.state.migrated = run_startup_migrations(settings)

    yield
    log.info("tasklist API shutting down")


def create_app(*, settings: TaskListSettings | None = None) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : TaskListSettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (outermost → innermost) ────────────────────────────
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(StarletteHTTPException, not_found_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    from tasklist.api.routers import diagnostics, tasks

    prefix = settings.api_prefix
    app.include_router(tasks.router, prefix=prefix, tags=["tasks"])
    app.include_router(diagnostics.router, prefix=prefix, tags=["diagnostics"])

    return app
