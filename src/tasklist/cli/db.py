"""
CLI: ``tasklist db`` — database management commands.
"""

from __future__ import annotations

import sqlite3

import typer

from tasklist.cli.utils import console, err_console
from tasklist.core.errors import TaskListError
from tasklist.core.migrations import apply_migrations
from tasklist.core.settings import TaskListSettings
from tasklist.core.sqlite_conn import resolve_database_path

app = typer.Typer(no_args_is_help=True)


@app.command()
def migrate(
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL or path"),
) -> None:
    """Apply pending schema migrations."""
    url = database or TaskListSettings().database_url
    try:
        result = apply_migrations(resolve_database_path(url))
    except (TaskListError, sqlite3.Error) as exc:
        err_console.print(f"[bold red]Error[/bold red]: {exc}")
        raise typer.Exit(code=1) from exc

    for name in result.applied:
        console.print(f"[green]applied[/green] {name}")
    for name, error in result.errors.items():
        err_console.print(f"[bold red]failed[/bold red] {name}: {error}")
    if not result.success:
        raise typer.Exit(code=1)
    if not result.applied:
        console.print("[dim]Nothing to apply.[/dim]")
