"""User profile endpoints and the admin user listing."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_admin
from app.core.database import get_db
from app.schemas.auth import CurrentUser, UserProfile, UserProfileUpdate, UsersListResponse
from app.services.users import DuplicateUserError, UserStore

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users (admin only)."""
    users = UserStore(db).list_users()
    return UsersListResponse(users=[UserProfile.model_validate(u) for u in users])


@router.get("/profile", response_model=UserProfile)
def get_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserProfile:
    user = UserStore(db).get_by_id(current_user.id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserProfile.model_validate(user)


@router.put("/profile", response_model=UserProfile)
def update_profile(
    body: UserProfileUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserProfile:
    """Update email, first name and last name of the current user."""
    store = UserStore(db)
    user = store.get_by_id(current_user.id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    try:
        user = store.update_profile(
            user,
            email=body.email,
            first_name=body.first_name,
            last_name=body.last_name,
        )
    except DuplicateUserError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    return UserProfile.model_validate(user)


@router.get("/{user_id}", response_model=UserProfile)
def get_user(
    user_id: str,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserProfile:
    user = UserStore(db).get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserProfile.model_validate(user)
