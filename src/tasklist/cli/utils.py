"""
CLI utility helpers — output formatting and context construction.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from tasklist.core.errors import TaskListError
from tasklist.core.settings import TaskListSettings
from tasklist.core.store import TaskStore
from tasklist.ops.context import OperationContext
from tasklist.ops.result import OperationResult

console = Console()
err_console = Console(stderr=True)


# ── Context helper ───────────────────────────────────────────────────────


def make_context(database: str | None = None) -> OperationContext:
    """Create an ``OperationContext`` for CLI commands.

    ``database`` overrides ``TASKLIST_DATABASE_URL`` when given.  An
    unusable URL prints the error and exits with status 1.
    """
    settings = TaskListSettings()
    url = database or settings.database_url
    try:
        store = TaskStore.from_url(url, timeout=settings.store_timeout)
    except TaskListError as exc:
        err_console.print(f"[bold red]Error[/bold red]: {exc}")
        raise typer.Exit(code=1) from exc
    return OperationContext(store=store, caller="cli")


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult`` to the terminal.

    Failures print the error kind and exit with status 1.
    """
    if not result.success:
        err = result.error
        kind = err.kind.value if err else "InternalServerError"
        detail = err.detail if err else "Unknown error"
        err_console.print(f"[bold red]Error[/bold red] ({kind}): {detail}")
        raise typer.Exit(code=1)

    data = result.data

    if as_json:
        if isinstance(data, list | tuple):
            payload: Any = [_to_dict(d) for d in data]
        elif data is None:
            payload = {"ok": True, **result.metadata}
        else:
            payload = _to_dict(data)
        console.print_json(json.dumps(payload, default=str))
        return

    if data is None:
        console.print(f"[green]OK[/green] {title}".rstrip())
        return

    if isinstance(data, list):
        if not data:
            console.print("[dim]No tasks were found.[/dim]")
            return
        _print_table(data, title=title)
    else:
        _print_dict(_to_dict(data), title=title)


# ── Private helpers ──────────────────────────────────────────────────────


def _print_table(items: list, *, title: str = "") -> None:
    """Render a list of dataclasses/dicts as a Rich table."""
    first = _to_dict(items[0])
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in first:
        table.add_column(col, overflow="fold")
    for item in items:
        d = _to_dict(item)
        table.add_row(*(str(v) for v in d.values()))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {v}")
