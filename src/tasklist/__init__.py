"""
tasklist - task list service with optimistic mutation sync.

Layers (leaf to root):

- ``tasklist.core``  — task model, SQLite store, error taxonomy, logging, settings
- ``tasklist.ops``   — transport-agnostic operations returning ``OperationResult``
- ``tasklist.sync``  — mutation dispatcher and query synchronizer
- ``tasklist.api``   — FastAPI transport
- ``tasklist.cli``   — Typer CLI
"""

__version__ = "0.1.0"
