"""Pydantic schemas for the HTTP API."""

from tasklist.api.schemas.common import ProblemDetail, SuccessResponse
from tasklist.api.schemas.tasks import AddTaskBody, DeletedSchema, TaskSchema

__all__ = ["AddTaskBody", "DeletedSchema", "ProblemDetail", "SuccessResponse", "TaskSchema"]
