"""Request/response schemas for auth and user endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.core.security import (
    PASSWORD_MAX_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class LoginRequest(BaseModel):
    """Credentials for login. username may also be the account email."""

    username: str = Field(..., min_length=1, max_length=255, description="Username or email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class RegisterRequest(BaseModel):
    """New account details."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")
    email: str = Field(
        ..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$", description="Email"
    )
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token from login")


class AuthResponse(BaseModel):
    """Token pair and identity returned after login, registration or refresh."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    username: str
    email: str
    role: str
    expires_in: int = Field(..., description="Access token lifetime in milliseconds")


class CurrentUser(BaseModel):
    """Authenticated user (id, username, role) for dependency injection."""

    id: str
    username: str
    role: str

    class Config:
        from_attributes = True


class UserProfile(BaseModel):
    """User as rendered to clients. Never includes the password hash."""

    id: str
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: str
    enabled: bool
    created_at: datetime
    last_login_at: datetime | None = None

    class Config:
        from_attributes = True


class UserProfileUpdate(BaseModel):
    """Editable profile fields."""

    email: str | None = Field(
        default=None, min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$"
    )
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserProfile]
