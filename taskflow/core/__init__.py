"""Core app configuration, errors, security primitives and database."""

from taskflow.core.config import Settings, get_settings
from taskflow.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]
