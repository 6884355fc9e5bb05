"""
CLI layer for tasklist.

Provides a Typer application with sub-commands that delegate to the
operations layer (``tasklist.ops``).

Entry point::

    tasklist --help
"""

from tasklist.cli.app import app

__all__ = ["app"]
