"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    UserProfile,
    UserProfileUpdate,
    UsersListResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.task_template import TaskTemplateResponse, TaskTemplateWrite
from app.schemas.workflow import (
    TaskSpec,
    WorkflowExecuteResponse,
    WorkflowResponse,
    WorkflowWrite,
)

__all__ = [
    "AuthResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "RefreshRequest",
    "RegisterRequest",
    "TaskSpec",
    "TaskTemplateResponse",
    "TaskTemplateWrite",
    "UserProfile",
    "UserProfileUpdate",
    "UsersListResponse",
    "WorkflowExecuteResponse",
    "WorkflowResponse",
    "WorkflowWrite",
]
