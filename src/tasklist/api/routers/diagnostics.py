"""
Diagnostics router — endpoints that always fail with a fixed error kind.

Endpoints:
    POST /errors/internal         Always 500 InternalServerError
    POST /errors/not-implemented  Always 501 NotImplementedError
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from tasklist.api.deps import OpContext
from tasklist.api.middleware.errors import result_error_response
from tasklist.api.schemas.common import ProblemDetail
from tasklist.ops import tasks as task_ops

router = APIRouter(prefix="/errors")


@router.post("/internal", responses={500: {"model": ProblemDetail}})
async def trigger_internal_error(ctx: OpContext, request: Request):
    result = await task_ops.trigger_internal_error(ctx)
    return result_error_response(result, request)


@router.post("/not-implemented", responses={501: {"model": ProblemDetail}})
async def trigger_not_implemented(ctx: OpContext, request: Request):
    result = await task_ops.trigger_not_implemented(ctx)
    return result_error_response(result, request)
