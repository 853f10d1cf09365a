"""ORM model for workflow documents (task list and metadata stored as JSON)."""

from sqlalchemy import Column, DateTime, String, Text

from app.models.base import Base, JSONDocument, new_id, utcnow


class Workflow(Base):
    """
    A named workflow owned by the user who created it.

    tasks is a list of task documents (type, name, config, next_tasks, conditions,
    template_id, ...). They are stored verbatim; nothing executes them.
    The metadata column is exposed as `meta` because Base reserves `metadata`.
    """

    __tablename__ = "workflows"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(64), nullable=True, index=True)
    created_by = Column(String(64), nullable=True, index=True)
    tasks = Column(JSONDocument, nullable=False, default=list)
    meta = Column("metadata", JSONDocument, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
