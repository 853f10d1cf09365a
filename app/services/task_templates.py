"""Task templates: reusable task definitions with default config and config schema."""

from sqlalchemy.orm import Session

from app.models import TaskTemplate
from app.schemas.task_template import TaskTemplateResponse, TaskTemplateWrite


class TaskTemplateNotFoundError(Exception):
    """Raised when a task template id does not exist."""

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        self.message = f"Task template not found: {template_id}"
        super().__init__(self.message)


def to_response(template: TaskTemplate) -> TaskTemplateResponse:
    return TaskTemplateResponse(
        id=template.id,
        name=template.name,
        description=template.description,
        type=template.type,
        category=template.category,
        default_config=template.default_config or {},
        config_schema=template.config_schema or {},
        created_by=template.created_by,
        is_active=template.is_active,
        version=template.version,
        metadata=template.meta or {},
        created_at=template.created_at,
        updated_at=template.updated_at,
    )


def create_task_template(
    db: Session, data: TaskTemplateWrite, created_by: str | None
) -> TaskTemplate:
    """Create a template; is_active defaults to True when the body leaves it out."""
    template = TaskTemplate(created_by=created_by)
    _apply(template, data)
    if template.is_active is None:
        template.is_active = True
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


def list_task_templates(
    db: Session,
    type_: str | None = None,
    category: str | None = None,
    active_only: bool = False,
) -> list[TaskTemplate]:
    query = db.query(TaskTemplate)
    if type_ is not None:
        query = query.filter(TaskTemplate.type == type_)
    if category is not None:
        query = query.filter(TaskTemplate.category == category)
    if active_only:
        query = query.filter(TaskTemplate.is_active.is_(True))
    return query.order_by(TaskTemplate.name, TaskTemplate.id).all()


def get_task_template(db: Session, template_id: str) -> TaskTemplate:
    template = db.get(TaskTemplate, template_id)
    if template is None:
        raise TaskTemplateNotFoundError(template_id)
    return template


def update_task_template(
    db: Session, template_id: str, data: TaskTemplateWrite
) -> TaskTemplate:
    """Replace the mutable fields. An omitted is_active keeps the current value."""
    template = get_task_template(db, template_id)
    _apply(template, data)
    db.commit()
    db.refresh(template)
    return template


def delete_task_template(db: Session, template_id: str) -> bool:
    template = db.get(TaskTemplate, template_id)
    if template is None:
        return False
    db.delete(template)
    db.commit()
    return True


def _apply(template: TaskTemplate, data: TaskTemplateWrite) -> None:
    template.name = data.name
    template.description = data.description
    template.type = data.type
    template.category = data.category
    template.default_config = dict(data.default_config)
    template.config_schema = dict(data.config_schema)
    if data.is_active is not None:
        template.is_active = data.is_active
    template.version = data.version
    template.meta = dict(data.metadata)
