"""User persistence: lookups, registration, role changes and deletion."""

import logging

from sqlalchemy.orm import Session

from taskflow.core.errors import ConflictError, NotFoundError
from taskflow.core.security import hash_password
from taskflow.models import User

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def normalize_email(email: str) -> str:
    return email.strip()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def require_user(db: Session, user_id: str) -> User:
    """Return the user or raise NotFoundError."""
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def create_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    role: str = "user",
    bcrypt_rounds: int = 10,
) -> User:
    """Insert a user with a hashed password. Raises ConflictError on duplicate email."""
    email = normalize_email(email)
    if get_user_by_email(db, email) is not None:
        raise ConflictError("Email already exists")
    user = User(
        name=name.strip(),
        email=email,
        password_hash=hash_password(password, rounds=bcrypt_rounds),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id, "role": user.role})
    return user


def list_users(db: Session) -> list[User]:
    """All users, newest first."""
    return db.query(User).order_by(User.created_at.desc()).all()


def set_role(db: Session, user: User, role: str) -> User:
    previous = user.role
    user.role = role
    db.commit()
    db.refresh(user)
    logger.info(
        "User role updated",
        extra={"user_id": user.id, "previous_role": previous, "role": role},
    )
    return user


def delete_user(db: Session, user: User) -> None:
    """Delete one user; the database cascades to their tasks and refresh tokens."""
    user_id = user.id
    db.delete(user)
    db.commit()
    logger.info("User deleted", extra={"user_id": user_id})
