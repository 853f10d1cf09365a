"""Task template CRUD endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.task_template import TaskTemplateResponse, TaskTemplateWrite
from app.services import task_templates as template_service
from app.services.task_templates import TaskTemplateNotFoundError

router = APIRouter()


@router.get("", response_model=list[TaskTemplateResponse])
def list_task_templates(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    type_filter: Annotated[str | None, Query(alias="type")] = None,
    category: Annotated[str | None, Query()] = None,
    active: Annotated[bool, Query()] = False,
) -> list[TaskTemplateResponse]:
    """List templates. Filter with ?type=..., ?category=..., ?active=true."""
    found = template_service.list_task_templates(
        db, type_=type_filter, category=category, active_only=active
    )
    return [template_service.to_response(t) for t in found]


@router.post("", response_model=TaskTemplateResponse, status_code=status.HTTP_201_CREATED)
def create_task_template(
    body: TaskTemplateWrite,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskTemplateResponse:
    template = template_service.create_task_template(db, body, created_by=current_user.username)
    return template_service.to_response(template)


@router.get("/{template_id}", response_model=TaskTemplateResponse)
def get_task_template(
    template_id: str,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskTemplateResponse:
    try:
        template = template_service.get_task_template(db, template_id)
    except TaskTemplateNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return template_service.to_response(template)


@router.put("/{template_id}", response_model=TaskTemplateResponse)
def update_task_template(
    template_id: str,
    body: TaskTemplateWrite,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskTemplateResponse:
    try:
        template = template_service.update_task_template(db, template_id, body)
    except TaskTemplateNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return template_service.to_response(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task_template(
    template_id: str,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    template_service.delete_task_template(db, template_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
