"""Workflow documents: create, list, read, replace, delete, and placeholder execution."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.models import Workflow
from app.schemas.workflow import WorkflowResponse, WorkflowWrite

logger = logging.getLogger(__name__)

EXECUTION_PENDING_MESSAGE = "Workflow execution not yet implemented"


class WorkflowNotFoundError(Exception):
    """Raised when a workflow id does not exist."""

    def __init__(self, workflow_id: str) -> None:
        self.workflow_id = workflow_id
        self.message = f"Workflow not found: {workflow_id}"
        super().__init__(self.message)


def to_response(workflow: Workflow) -> WorkflowResponse:
    return WorkflowResponse(
        id=workflow.id,
        name=workflow.name,
        description=workflow.description,
        status=workflow.status,
        created_by=workflow.created_by,
        tasks=workflow.tasks or [],
        metadata=workflow.meta or {},
        created_at=workflow.created_at,
        updated_at=workflow.updated_at,
    )


def create_workflow(db: Session, data: WorkflowWrite, created_by: str | None) -> Workflow:
    workflow = Workflow(created_by=created_by)
    _apply(workflow, data)
    db.add(workflow)
    db.commit()
    db.refresh(workflow)
    return workflow


def list_workflows(
    db: Session,
    status: str | None = None,
    created_by: str | None = None,
) -> list[Workflow]:
    """Return workflows, optionally filtered by status and/or creator, oldest first."""
    query = db.query(Workflow)
    if status is not None:
        query = query.filter(Workflow.status == status)
    if created_by is not None:
        query = query.filter(Workflow.created_by == created_by)
    return query.order_by(Workflow.created_at, Workflow.id).all()


def get_workflow(db: Session, workflow_id: str) -> Workflow:
    workflow = db.get(Workflow, workflow_id)
    if workflow is None:
        raise WorkflowNotFoundError(workflow_id)
    return workflow


def update_workflow(db: Session, workflow_id: str, data: WorkflowWrite) -> Workflow:
    """Replace the editable fields of an existing workflow. created_by is kept."""
    workflow = get_workflow(db, workflow_id)
    _apply(workflow, data)
    db.commit()
    db.refresh(workflow)
    return workflow


def delete_workflow(db: Session, workflow_id: str) -> bool:
    """Delete a workflow. Returns False if it did not exist (deleting twice is fine)."""
    workflow = db.get(Workflow, workflow_id)
    if workflow is None:
        return False
    db.delete(workflow)
    db.commit()
    return True


def execute_workflow(db: Session, workflow_id: str, input_data: dict[str, Any]) -> dict[str, str]:
    """
    Accept an execution request for an existing workflow.

    There is no execution engine: the workflow is looked up and a static pending
    status is returned. Task next_tasks/conditions are never evaluated.
    """
    workflow = get_workflow(db, workflow_id)
    logger.info(
        "Workflow execution requested",
        extra={
            "workflow_id": workflow.id,
            "task_count": len(workflow.tasks or []),
            "input_keys": sorted(input_data)[:20],
        },
    )
    return {"status": "pending", "message": EXECUTION_PENDING_MESSAGE}


def _apply(workflow: Workflow, data: WorkflowWrite) -> None:
    workflow.name = data.name
    workflow.description = data.description
    workflow.status = data.status
    workflow.tasks = [task.model_dump() for task in data.tasks]
    workflow.meta = dict(data.metadata)
