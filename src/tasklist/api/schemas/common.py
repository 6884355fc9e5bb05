"""
Common API schemas — success envelope and RFC 7807 errors.

Every endpoint returns either :class:`SuccessResponse` (200/201) or
:class:`ProblemDetail` (404/500/501).

Response Envelope Conventions:
    - All 2xx responses use ``SuccessResponse[T]``
    - All error responses use ``ProblemDetail`` (RFC 7807)
    - ``elapsed_ms`` tracks server-side processing time
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ProblemDetail(BaseModel):
    """RFC 7807 «Problem Details for HTTP APIs».

    ``title`` is always the fixed message of the ``code`` kind; ``detail``
    carries the operation-specific explanation.

    Error Codes:
        - ``NotFound`` (404): Resource or route does not exist
        - ``InternalServerError`` (500): Unexpected server failure
        - ``NotImplementedError`` (501): Deliberately unfinished operation

    Example:
        {
            "type": "about:blank",
            "title": "Not Implemented",
            "status": 501,
            "detail": "Not Implemented Server Error",
            "instance": "/api/errors/not-implemented",
            "code": "NotImplementedError"
        }
    """

    type: str = Field(default="about:blank", description="Error type URI (usually 'about:blank')")
    title: str = Field(description="Fixed human-readable message of the error kind")
    status: int = Field(description="HTTP status code (404, 500 or 501)")
    detail: str = Field(default="", description="Human-readable explanation of the error")
    instance: str = Field(default="", description="URI of the failing request")
    code: str = Field(description="Error kind (NotFound, InternalServerError, NotImplementedError)")


class SuccessResponse(BaseModel, Generic[T]):
    """Standard success envelope."""

    data: T = Field(description="Response payload (type varies by endpoint)")
    elapsed_ms: float = Field(default=0.0, description="Server-side processing time in milliseconds")
