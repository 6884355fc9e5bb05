"""
Tasks router — list, add and delete tasks.

Endpoints:
    GET    /tasks            List every task, ordered by id
    POST   /tasks            Add a task (201, returns the created task)
    DELETE /tasks/{task_id}  Delete a task (succeeds for unknown ids)
"""

from __future__ import annotations

from fastapi import APIRouter, Path, Request, status

from tasklist.api.deps import OpContext
from tasklist.api.middleware.errors import result_error_response
from tasklist.api.schemas.common import ProblemDetail, SuccessResponse
from tasklist.api.schemas.tasks import AddTaskBody, DeletedSchema, TaskSchema
from tasklist.ops import tasks as task_ops

router = APIRouter(prefix="/tasks")

_ERRORS = {500: {"model": ProblemDetail, "description": "Store failure"}}


@router.get("", response_model=SuccessResponse[list[TaskSchema]], responses=_ERRORS)
async def list_tasks(ctx: OpContext, request: Request):
    """List every task ordered by id ascending.

    Example:
        GET /api/tasks

        Response:
        {"data": [{"id": 1, "title": "Buy milk", "completed": false}], "elapsed_ms": 0.8}
    """
    result = await task_ops.list_tasks(ctx)
    if not result.success:
        return result_error_response(result, request)
    return SuccessResponse(
        data=[TaskSchema(**t.to_dict()) for t in result.data or []],
        elapsed_ms=result.elapsed_ms,
    )


@router.post(
    "",
    response_model=SuccessResponse[TaskSchema],
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
)
async def add_task(ctx: OpContext, body: AddTaskBody, request: Request):
    """Add a task.  ``completed`` always starts ``false``."""
    result = await task_ops.add_task(ctx, body.title)
    if not result.success:
        return result_error_response(result, request)
    return SuccessResponse(data=TaskSchema(**result.data.to_dict()), elapsed_ms=result.elapsed_ms)


@router.delete("/{task_id}", response_model=SuccessResponse[DeletedSchema], responses=_ERRORS)
async def delete_task(
    ctx: OpContext,
    request: Request,
    task_id: int = Path(..., ge=0, description="Task id"),
):
    """Delete a task.  Deleting an id that does not exist is not an error."""
    result = await task_ops.delete_task(ctx, task_id)
    if not result.success:
        return result_error_response(result, request)
    return SuccessResponse(
        data=DeletedSchema(id=task_id, removed=result.metadata.get("removed", 0)),
        elapsed_ms=result.elapsed_ms,
    )
