"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.task_template import TaskTemplate
from app.models.user import User
from app.models.workflow import Workflow

__all__ = ["Base", "TaskTemplate", "User", "Workflow"]
