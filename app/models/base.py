"""SQLAlchemy declarative Base and shared column types."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase

# Document-shaped columns: JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests).
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def new_id() -> str:
    """Opaque string identifier for new rows."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)
