"""
CLI: ``tasklist serve`` — start the API server.
"""

from __future__ import annotations

import os

import typer
import uvicorn

from tasklist.cli.utils import console
from tasklist.core.settings import DEMO_LATENCY_MS, TaskListSettings


def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    log_level: str = typer.Option("info", "--log-level"),
    demo_latency: bool = typer.Option(
        False, "--demo-latency", help="Delay add/error endpoints like the browser demo"
    ),
) -> None:
    """Start the tasklist REST API server."""
    settings = TaskListSettings()
    if demo_latency:
        settings = settings.with_demo_latency()
    host = host or settings.host
    port = port or settings.port

    console.print(f"[bold green]Starting tasklist API[/bold green] on {host}:{port}")
    if reload:
        # The reloader imports the factory in a fresh process that only sees the environment.
        if demo_latency:
            for key, value in DEMO_LATENCY_MS.items():
                os.environ[f"TASKLIST_{key.upper()}"] = str(value)
        uvicorn.run(
            "tasklist.api:create_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            log_level=log_level,
        )
        return

    from tasklist.api import create_app

    uvicorn.run(create_app(settings=settings), host=host, port=port, log_level=log_level)
