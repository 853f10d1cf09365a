"""ORM model for reusable task templates."""

from sqlalchemy import Boolean, Column, DateTime, String, Text

from app.models.base import Base, JSONDocument, new_id, utcnow


class TaskTemplate(Base):
    """Reusable task definition: default config plus a schema for its config."""

    __tablename__ = "task_templates"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(64), nullable=True, index=True)
    category = Column(String(64), nullable=True, index=True)
    default_config = Column(JSONDocument, nullable=False, default=dict)
    config_schema = Column(JSONDocument, nullable=False, default=dict)
    created_by = Column(String(64), nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    version = Column(String(32), nullable=True)
    meta = Column("metadata", JSONDocument, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
