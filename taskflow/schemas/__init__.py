"""Pydantic request/response schemas."""

from taskflow.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserPublic,
)
from taskflow.schemas.common import Envelope, MessageResponse
from taskflow.schemas.health import HealthResponse
from taskflow.schemas.task import (
    TaskCreateRequest,
    TaskOut,
    TaskStats,
    TaskUpdateRequest,
)

__all__ = [
    "CurrentUser",
    "Envelope",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterRequest",
    "TaskCreateRequest",
    "TaskOut",
    "TaskStats",
    "TaskUpdateRequest",
    "UserPublic",
]
