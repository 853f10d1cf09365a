"""Request/response schemas for workflows and their task documents."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class TaskSpec(BaseModel):
    """
    One task inside a workflow.

    next_tasks and conditions describe intended follow-up tasks; they are stored
    as given and are not evaluated by the service.
    """

    type: str | None = None
    name: str | None = None
    config: dict[str, Any] = Field(default_factory=dict)
    next_tasks: list[str] = Field(default_factory=list)
    conditions: dict[str, str] = Field(default_factory=dict)
    template_id: str | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)
    template_based: bool | None = None
    config_overrides: dict[str, Any] = Field(default_factory=dict)


class WorkflowWrite(BaseModel):
    """Body for creating or replacing a workflow."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    status: str | None = Field(default=None, max_length=64)
    tasks: list[TaskSpec] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class WorkflowResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    status: str | None = None
    created_by: str | None = None
    tasks: list[TaskSpec]
    metadata: dict[str, Any]
    created_at: datetime
    updated_at: datetime


class WorkflowExecuteResponse(BaseModel):
    """Placeholder result; workflows are accepted but never run."""

    status: Literal["pending"] = "pending"
    message: str
