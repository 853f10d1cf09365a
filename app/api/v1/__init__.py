"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, health, task_templates, users, workflows

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(workflows.router, prefix="/workflows", tags=["workflows"])
router.include_router(task_templates.router, prefix="/task-templates", tags=["task-templates"])
