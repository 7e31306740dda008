"""SQLAlchemy declarative Base and column defaults shared by the users, tasks and refresh_tokens models."""

import uuid
from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def new_id() -> str:
    """Opaque primary key for users and tasks."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)
