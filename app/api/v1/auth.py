"""Login, registration, refresh and "who am I", plus shared auth dependencies."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import get_password_hasher
from app.models.user import ADMIN_ROLE
from app.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    UserProfile,
)
from app.services.auth import (
    AccountDisabled,
    AuthService,
    EmailTaken,
    InvalidCredentials,
    InvalidRefreshToken,
    UsernameTaken,
    UserNotFound,
)
from app.services.tokens import TokenInvalid, get_token_service
from app.services.users import UserStore

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_auth_service(db: Annotated[Session, Depends(get_db)]) -> AuthService:
    """Dependency: AuthService bound to this request's session."""
    return AuthService(UserStore(db), get_token_service(), get_password_hasher())


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    if credentials is None:
        raise _unauthorized("Not authenticated")
    return credentials.credentials


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Authenticate with username (or email) and password.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    try:
        return auth.login(body.username, body.password)
    except InvalidCredentials as e:
        raise _unauthorized(e.message) from e
    except AccountDisabled as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Create a USER account and return tokens for it."""
    try:
        return auth.register(
            body.username,
            body.password,
            body.email,
            first_name=body.first_name,
            last_name=body.last_name,
        )
    except (UsernameTaken, EmailTaken) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e


@router.post("/refresh", response_model=AuthResponse)
def refresh(
    body: RefreshRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Exchange a refresh token for a new access/refresh pair."""
    try:
        return auth.refresh(body.refresh_token)
    except InvalidRefreshToken as e:
        raise _unauthorized(e.message) from e


@router.get("/me", response_model=UserProfile)
def read_me(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> UserProfile:
    """
    Return the profile of the user the bearer token was issued to.

    Disabled accounts still get their profile here (200); the other routes
    reject them with 403 through get_current_user.
    """
    token = _bearer_token(credentials)
    try:
        user = auth.current_user(token)
    except TokenInvalid as e:
        raise _unauthorized("Invalid or expired token") from e
    except UserNotFound as e:
        raise _unauthorized(e.message) from e
    return UserProfile.model_validate(user)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT of an enabled user. Raises 401/403 otherwise."""
    token = _bearer_token(credentials)
    try:
        user = auth.current_user(token)
    except TokenInvalid as e:
        raise _unauthorized("Invalid or expired token") from e
    except UserNotFound as e:
        raise _unauthorized(e.message) from e
    if not user.enabled:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is disabled.")
    return CurrentUser(id=user.id, username=user.username, role=user.role)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role ADMIN. Raises 403 for others."""
    if current_user.role != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user
