"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Boolean, Column, DateTime, String

from app.models.base import Base, new_id, utcnow

DEFAULT_ROLE = "USER"
ADMIN_ROLE = "ADMIN"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    username and email are each unique across all users (unique indexes are the
    authority under concurrent registration). password_hash never holds plaintext.
    role: free-form, 'USER' by default, 'ADMIN' for administrators.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(64), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=DEFAULT_ROLE)
    enabled = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
