"""Registration, login, token refresh/logout and auth dependencies (get_current_user, require_admin)."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from taskflow.core.config import Settings
from taskflow.core.database import get_db
from taskflow.core.errors import AuthenticationError, AuthorizationError, ValidationError
from taskflow.core.security import (
    create_access_token,
    decode_access_token,
    decode_refresh_token,
    verify_password,
)
from taskflow.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    UserPublic,
    UserResponse,
)
from taskflow.schemas.common import MessageResponse
from taskflow.services import sessions, users
from taskflow.services.policy import Deny, decide_manage_users
from taskflow.services.validation import validate_registration

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Dependency: the Settings instance the app was created with."""
    return request.app.state.settings


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise AuthenticationError("Not authorized, no token")
    try:
        payload = decode_access_token(credentials.credentials, settings)
    except jwt.PyJWTError:
        raise AuthenticationError("Not authorized, token failed")
    sub = payload.get("sub")
    if not sub:
        raise AuthenticationError("Not authorized, token failed")
    user = users.get_user(db, str(sub))
    if user is None:
        raise AuthenticationError("Not authorized, user not found")
    return CurrentUser.model_validate(user)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    decision = decide_manage_users(current_user)
    if isinstance(decision, Deny):
        raise AuthorizationError(decision.reason)
    return current_user


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    body: RegisterRequest | None = None,
) -> UserResponse:
    """Create an account with role 'user'. Admins are promoted via PUT /admin/{id}/role."""
    body = body or RegisterRequest()
    error = validate_registration(body.model_dump())
    if error:
        raise ValidationError(error)

    user = users.create_user(
        db,
        name=body.name,
        email=body.email,
        password=body.password,
        role="user",
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )
    return UserResponse(message="User registered", user=UserPublic.model_validate(user))


@router.post("/login", response_model=LoginResponse)
def login(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    body: LoginRequest | None = None,
) -> LoginResponse:
    """
    Authenticate with email and password; returns an access token and a refresh token.
    Include the access token in the Authorization header as: Bearer <accessToken>
    """
    body = body or LoginRequest()
    if not body.email or not body.password:
        raise ValidationError("Invalid email or password")

    user = users.get_user_by_email(db, body.email)
    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("Login failed", extra={"reason": "bad_credentials"})
        raise ValidationError("Invalid email or password")

    access_token = create_access_token(user.id, user.role, settings)
    refresh_token = sessions.issue_refresh_token(db, user, settings)
    logger.info("Login succeeded", extra={"user_id": user.id})
    return LoginResponse(
        message="Login success",
        access_token=access_token,
        refresh_token=refresh_token,
        user=UserPublic.model_validate(user),
    )


@router.post("/refresh", response_model=RefreshResponse)
def refresh(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    body: RefreshRequest | None = None,
) -> RefreshResponse:
    """Exchange a stored, unexpired refresh token for a new access token."""
    body = body or RefreshRequest()
    if not body.refresh_token:
        raise ValidationError("Refresh token is required")

    stored = sessions.find_refresh_token(db, body.refresh_token)
    if stored is None:
        raise AuthenticationError("Invalid refresh token")
    try:
        payload = decode_refresh_token(body.refresh_token, settings)
    except jwt.PyJWTError:
        raise AuthenticationError("Invalid refresh token or expired")

    # Role comes from the database so a role change takes effect on the next refresh.
    user = users.get_user(db, str(payload.get("sub")))
    if user is None or user.id != stored.user_id:
        raise AuthenticationError("Invalid refresh token or expired")

    return RefreshResponse(
        message="Access token refreshed",
        access_token=create_access_token(user.id, user.role, settings),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    body: LogoutRequest | None = None,
) -> MessageResponse:
    """
    Revoke refresh tokens. With a refreshToken in the body only that session ends;
    without one every session of the current user is revoked.
    """
    if body is not None and body.refresh_token:
        sessions.revoke_refresh_token(db, current_user.id, body.refresh_token)
    else:
        sessions.revoke_all_refresh_tokens(db, current_user.id)
    return MessageResponse(message="Logged out successfully")


@router.get("/profile", response_model=UserResponse)
def profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    user = users.require_user(db, current_user.id)
    return UserResponse(user=UserPublic.model_validate(user))
