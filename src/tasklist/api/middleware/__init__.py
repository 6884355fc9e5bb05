"""HTTP middleware and exception handlers."""

from tasklist.api.middleware.errors import (
    not_found_exception_handler,
    problem_response,
    result_error_response,
    unhandled_exception_handler,
)
from tasklist.api.middleware.request_id import RequestIDMiddleware
from tasklist.api.middleware.timing import TimingMiddleware

__all__ = [
    "RequestIDMiddleware",
    "TimingMiddleware",
    "not_found_exception_handler",
    "problem_response",
    "result_error_response",
    "unhandled_exception_handler",
]
