"""Request/response schemas for auth and admin user endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from taskflow.schemas.common import Envelope


class RegisterRequest(BaseModel):
    """Registration payload. Presence and password strength are checked by services.validation."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Unique email address")
    password: str | None = Field(default=None, description="Min 8 chars with upper, lower and digit")


class LoginRequest(BaseModel):
    """Credentials for login."""

    model_config = ConfigDict(extra="ignore")

    email: str | None = None
    password: str | None = None


class RefreshRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    refresh_token: str | None = Field(default=None, alias="refreshToken")


class LogoutRequest(BaseModel):
    """Optional logout body; when refreshToken is given only that session is revoked."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    refresh_token: str | None = Field(default=None, alias="refreshToken")


class RoleUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: str | None = Field(default=None, description="'user' or 'admin'")


class CurrentUser(BaseModel):
    """Authenticated user resolved from the Bearer token, for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: str


class UserPublic(BaseModel):
    """User as returned by the API (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: str
    created_at: datetime | None = None


class UserResponse(Envelope):
    """Response for register, profile and role update."""

    message: str | None = None
    user: UserPublic


class LoginResponse(Envelope):
    """Tokens plus the logged-in user. Include accessToken as: Authorization: Bearer <token>."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    access_token: str = Field(..., alias="accessToken")
    refresh_token: str = Field(..., alias="refreshToken")
    user: UserPublic


class RefreshResponse(Envelope):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    access_token: str = Field(..., alias="accessToken")


class UsersListResponse(Envelope):
    """Response for GET /admin (admin only)."""

    count: int
    users: list[UserPublic]
