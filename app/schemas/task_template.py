"""Request/response schemas for task templates."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class TaskTemplateWrite(BaseModel):
    """Body for creating or replacing a task template. is_active defaults to true."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    type: str | None = Field(default=None, max_length=64)
    category: str | None = Field(default=None, max_length=64)
    default_config: dict[str, Any] = Field(default_factory=dict)
    config_schema: dict[str, Any] = Field(default_factory=dict)
    is_active: bool | None = None
    version: str | None = Field(default=None, max_length=32)
    metadata: dict[str, Any] = Field(default_factory=dict)


class TaskTemplateResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    type: str | None = None
    category: str | None = None
    default_config: dict[str, Any]
    config_schema: dict[str, Any]
    created_by: str | None = None
    is_active: bool
    version: str | None = None
    metadata: dict[str, Any]
    created_at: datetime
    updated_at: datetime
