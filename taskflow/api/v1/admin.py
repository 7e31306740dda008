"""Admin-only user management: list users, change roles, delete accounts."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskflow.api.v1.auth import require_admin
from taskflow.core.database import get_db
from taskflow.core.errors import ValidationError
from taskflow.schemas.auth import (
    CurrentUser,
    RoleUpdateRequest,
    UserPublic,
    UserResponse,
    UsersListResponse,
)
from taskflow.schemas.common import MessageResponse
from taskflow.services import users
from taskflow.services.policy import decide_delete_user, enforce
from taskflow.services.validation import validate_role

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users, newest first (admin only)."""
    rows = users.list_users(db)
    return UsersListResponse(
        count=len(rows), users=[UserPublic.model_validate(u) for u in rows]
    )


@router.put("/{user_id}/role", response_model=UserResponse)
def update_user_role(
    user_id: str,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    body: RoleUpdateRequest | None = None,
) -> UserResponse:
    """Set a user's role to 'user' or 'admin' (admin only)."""
    role = body.role if body else None
    error = validate_role(role)
    if error:
        raise ValidationError(error)
    user = users.require_user(db, user_id)
    user = users.set_role(db, user, role)
    return UserResponse(
        message="User role updated successfully", user=UserPublic.model_validate(user)
    )


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a user and, by cascade, their tasks and sessions. Admins cannot delete themselves."""
    user = users.require_user(db, user_id)
    enforce(decide_delete_user(admin, user.id))
    users.delete_user(db, user)
    return MessageResponse(message="User deleted successfully")
