"""Workflow CRUD endpoints and the (not yet implemented) execute endpoint."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.workflow import WorkflowExecuteResponse, WorkflowResponse, WorkflowWrite
from app.services import workflows as workflow_service
from app.services.workflows import WorkflowNotFoundError

router = APIRouter()


@router.post("", response_model=WorkflowResponse, status_code=status.HTTP_201_CREATED)
def create_workflow(
    body: WorkflowWrite,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> WorkflowResponse:
    workflow = workflow_service.create_workflow(db, body, created_by=current_user.username)
    return workflow_service.to_response(workflow)


@router.get("", response_model=list[WorkflowResponse])
def list_workflows(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    created_by: Annotated[str | None, Query()] = None,
) -> list[WorkflowResponse]:
    """List workflows. Filter with ?status=... and/or ?created_by=<username>."""
    found = workflow_service.list_workflows(db, status=status_filter, created_by=created_by)
    return [workflow_service.to_response(w) for w in found]


@router.get("/{workflow_id}", response_model=WorkflowResponse)
def get_workflow(
    workflow_id: str,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> WorkflowResponse:
    try:
        workflow = workflow_service.get_workflow(db, workflow_id)
    except WorkflowNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return workflow_service.to_response(workflow)


@router.put("/{workflow_id}", response_model=WorkflowResponse)
def update_workflow(
    workflow_id: str,
    body: WorkflowWrite,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> WorkflowResponse:
    try:
        workflow = workflow_service.update_workflow(db, workflow_id, body)
    except WorkflowNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return workflow_service.to_response(workflow)


@router.delete("/{workflow_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_workflow(
    workflow_id: str,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    workflow_service.delete_workflow(db, workflow_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{workflow_id}/execute", response_model=WorkflowExecuteResponse)
def execute_workflow(
    workflow_id: str,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    input_data: Annotated[dict[str, Any] | None, Body()] = None,
) -> WorkflowExecuteResponse:
    """Accept an execution request. Always answers with status 'pending'; nothing runs."""
    try:
        result = workflow_service.execute_workflow(db, workflow_id, input_data or {})
    except WorkflowNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return WorkflowExecuteResponse(**result)
