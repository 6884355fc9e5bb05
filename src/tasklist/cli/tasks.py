"""
CLI: ``tasklist tasks`` — list, add and delete tasks against the local database.
"""

from __future__ import annotations

import asyncio

import typer

from tasklist.cli.utils import make_context, output_result
from tasklist.ops import tasks as task_ops

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_(
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL or path"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """List every task."""
    ctx = make_context(database)
    result = asyncio.run(task_ops.list_tasks(ctx))
    output_result(result, as_json=json_out, title="Tasks")


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    database: str | None = typer.Option(None, "--database", "-d"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Add a task."""
    ctx = make_context(database)
    result = asyncio.run(task_ops.add_task(ctx, title))
    output_result(result, as_json=json_out, title="Added")


@app.command()
def delete(
    task_id: int = typer.Argument(..., min=0, help="Task id"),
    database: str | None = typer.Option(None, "--database", "-d"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Delete a task (unknown ids are not an error)."""
    ctx = make_context(database)
    result = asyncio.run(task_ops.delete_task(ctx, task_id))
    output_result(result, as_json=json_out, title=f"Deleted {task_id}")
