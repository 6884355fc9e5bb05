"""
Error-handling middleware — renders AppError kinds as RFC 7807 responses.

Every failure that reaches the HTTP boundary goes through
:func:`problem_response`, which takes its status from the AppError status
table; nothing here picks a status code by itself.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasklist.api.schemas.common import ProblemDetail
from tasklist.core.errors import AppError, classify, status_for
from tasklist.core.logging import get_logger
from tasklist.ops.result import OperationResult

logger = get_logger(__name__)


def problem_response(
    kind: AppError,
    *,
    detail: str = "",
    instance: str = "",
) -> JSONResponse:
    """Build a RFC 7807 JSON error response for *kind*."""
    status = status_for(kind)
    body = ProblemDetail(
        title=kind.message,
        status=status,
        detail=detail,
        instance=instance,
        code=kind.value,
    )
    return JSONResponse(
        status_code=status,
        content=body.model_dump(),
        media_type="application/problem+json",
    )


def result_error_response(result: OperationResult, request: Request) -> JSONResponse:
    """Convert a failed ``OperationResult`` into a Problem Details response."""
    kind = result.kind or AppError.INTERNAL_SERVER_ERROR
    detail = result.error.detail if result.error else ""
    return problem_response(kind, detail=detail, instance=str(request.url.path))


async def not_found_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render routing misses through the AppError table; defer other HTTP errors."""
    if classify(exc.status_code) is AppError.NOT_FOUND:
        return problem_response(
            AppError.NOT_FOUND,
            detail=f"No route for {request.method} {request.url.path}",
            instance=str(request.url.path),
        )
    return await http_exception_handler(request, exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: classify the exception and render its kind."""
    kind = classify(exc)
    logger.exception("unhandled_exception", path=request.url.path, kind=kind.value)
    debug = request.app.state.settings.debug
    return problem_response(
        kind,
        detail=str(exc) if debug else "An unexpected error occurred.",
        instance=str(request.url.path),
    )
