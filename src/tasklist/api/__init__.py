"""
REST API layer for tasklist.

Provides a FastAPI application factory whose endpoints delegate to the
operations layer (``tasklist.ops``).  This package handles only HTTP
transport concerns: serialisation, error mapping and request context.

Quick start::

    from tasklist.api import create_app

    app = create_app()  # ready for uvicorn
"""

from tasklist.api.app import create_app

__all__ = ["create_app"]
