"""Payload validation for registration, tasks and query filters.

Every validator is pure: it takes the request data as a mapping and returns
``None`` when valid or the first violated rule as a message. Rules are checked
in a fixed order so the same bad payload always yields the same message.
"""

import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from taskflow.core.security import PASSWORD_MIN_LEN

TASK_STATUSES: tuple[str, ...] = ("pending", "in_progress", "completed")
TASK_PRIORITIES: tuple[str, ...] = ("low", "medium", "high")
USER_ROLES: tuple[str, ...] = ("user", "admin")

TITLE_MAX_LENGTH = 200

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")


def parse_due_date(value: str | date | None) -> date | None:
    """Parse an ISO date or datetime string; None for empty. Raises ValueError when unparseable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()


def _due_date_error(value: Any) -> str | None:
    if not value:
        return None
    try:
        parse_due_date(value)
    except (TypeError, ValueError):
        return "Invalid due date format"
    return None


def _present(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


STATUS_ERROR = f"Status must be one of: {', '.join(TASK_STATUSES)}"
PRIORITY_ERROR = f"Priority must be one of: {', '.join(TASK_PRIORITIES)}"


def validate_registration(data: Mapping[str, Any]) -> str | None:
    """Require name, email and a strong password (length, upper, lower, digit)."""
    name = data.get("name")
    email = data.get("email")
    password = data.get("password")

    if not _present(name) or not _present(email) or not password:
        return "All fields are required"

    if len(password) < PASSWORD_MIN_LEN:
        return f"Password must be at least {PASSWORD_MIN_LEN} characters long"
    if not _UPPER.search(password):
        return "Password must contain at least one uppercase letter"
    if not _LOWER.search(password):
        return "Password must contain at least one lowercase letter"
    if not _DIGIT.search(password):
        return "Password must contain at least one digit"

    return None


def validate_task_create(data: Mapping[str, Any]) -> str | None:
    """Title is required; status, priority and due date are checked only when given."""
    title = data.get("title")
    if not title or not title.strip():
        return "Title is required"
    if len(title) > TITLE_MAX_LENGTH:
        return f"Title must not exceed {TITLE_MAX_LENGTH} characters"

    status = data.get("status")
    if status and status not in TASK_STATUSES:
        return STATUS_ERROR

    priority = data.get("priority")
    if priority and priority not in TASK_PRIORITIES:
        return PRIORITY_ERROR

    return _due_date_error(data.get("due_date"))


def validate_task_update(data: Mapping[str, Any]) -> str | None:
    """
    Partial update: only keys present in data are checked.

    A present title must be non-blank. A present status or priority must be a
    valid enum value; null is rejected so the stored value is never cleared.
    """
    if "title" in data:
        title = data["title"]
        if title is None or not title.strip():
            return "Title cannot be empty"
        if len(title) > TITLE_MAX_LENGTH:
            return f"Title must not exceed {TITLE_MAX_LENGTH} characters"

    if "status" in data and data["status"] not in TASK_STATUSES:
        return STATUS_ERROR

    if "priority" in data and data["priority"] not in TASK_PRIORITIES:
        return PRIORITY_ERROR

    return _due_date_error(data.get("due_date"))


def validate_query_filters(data: Mapping[str, Any]) -> str | None:
    status = data.get("status")
    if status and status not in TASK_STATUSES:
        return f"Invalid status filter. Must be one of: {', '.join(TASK_STATUSES)}"

    priority = data.get("priority")
    if priority and priority not in TASK_PRIORITIES:
        return f"Invalid priority filter. Must be one of: {', '.join(TASK_PRIORITIES)}"

    return None


def validate_role(role: Any) -> str | None:
    if not role:
        return "Role is required"
    if role not in USER_ROLES:
        return 'Invalid role. Must be "user" or "admin"'
    return None
