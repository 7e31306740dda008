"""Password hashing and JWT creation/verification for authentication."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from taskflow.core.config import Settings

# Password rules applied at registration (see services.validation).
PASSWORD_MIN_LEN = 8


def hash_password(plain_password: str, rounds: int = 10) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def _encode(sub: str, role: str, lifetime: timedelta, secret: str, algorithm: str) -> tuple[str, datetime]:
    now = datetime.now(UTC)
    expire = now + lifetime
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": role,
        # jti keeps two tokens issued in the same second distinct (refresh tokens are stored unique).
        "jti": uuid.uuid4().hex,
        "exp": expire,
        "iat": now,
    }
    return jwt.encode(payload, secret, algorithm=algorithm), expire


def create_access_token(sub: str, role: str, settings: Settings) -> str:
    """Create a short-lived JWT access token carrying sub (user id) and role."""
    token, _ = _encode(
        sub,
        role,
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        settings.ACCESS_TOKEN_SECRET.get_secret_value(),
        settings.JWT_ALGORITHM,
    )
    return token


def create_refresh_token(sub: str, role: str, settings: Settings) -> tuple[str, datetime]:
    """Create a refresh token; returns (token, expires_at). Callers persist it."""
    return _encode(
        sub,
        role,
        timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        settings.REFRESH_TOKEN_SECRET.get_secret_value(),
        settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Decode and validate an access token; return payload (sub, role, jti, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    return jwt.decode(
        token,
        settings.ACCESS_TOKEN_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
    )


def decode_refresh_token(token: str, settings: Settings) -> dict[str, Any]:
    """Decode and validate a refresh token. Raises jwt.PyJWTError on failure."""
    return jwt.decode(
        token,
        settings.REFRESH_TOKEN_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
    )
