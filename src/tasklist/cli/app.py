"""
Root Typer application for the tasklist CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from tasklist.core.logging import configure_logging

app = Typer(
    name="tasklist",
    help="tasklist — task list service with optimistic mutation sync.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        from tasklist import __version__

        typer.echo(f"tasklist {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    """tasklist CLI — manage tasks and the database, run the API."""
    # Keep stdout clean for --json output unless asked otherwise.
    configure_logging(level="DEBUG" if verbose else "WARNING", json_format=False)


from tasklist.cli.db import app as db_app  # noqa: E402
from tasklist.cli.serve import serve  # noqa: E402
from tasklist.cli.tasks import app as tasks_app  # noqa: E402

app.add_typer(db_app, name="db", help="Database operations.")
app.add_typer(tasks_app, name="tasks", help="Task management.")
app.command("serve", help="Start the API server.")(serve)
