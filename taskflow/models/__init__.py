"""SQLAlchemy ORM models."""

from taskflow.models.base import Base
from taskflow.models.refresh_token import RefreshToken
from taskflow.models.task import Task
from taskflow.models.user import User

__all__ = ["Base", "RefreshToken", "Task", "User"]
