"""Task schemas for the tasks router."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TaskSchema(BaseModel):
    """A persisted task."""

    id: int = Field(ge=0, description="Server-assigned task id")
    title: str = Field(description="Task title")
    completed: bool = Field(default=False, description="Completion flag (never toggled by this API)")


class AddTaskBody(BaseModel):
    """Request body for ``POST /tasks``."""

    title: str = Field(description="Task title; emptiness is not validated here")


class DeletedSchema(BaseModel):
    """Confirmation for ``DELETE /tasks/{task_id}``."""

    id: int = Field(description="The id that was requested for deletion")
    removed: int = Field(description="Rows removed: 0 when the id did not exist, else 1")
