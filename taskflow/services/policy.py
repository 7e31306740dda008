"""Authorization policy: who may read, change or delete which task or user.

Decisions are pure functions of (actor, resource, action) and return one of
``Allow``, ``AllowPartial(fields)`` or ``Deny(reason, status_code)``. Handlers
pass the decision to ``enforce`` which raises the matching API error on Deny.

Update tie-break: the creator/admin branch is evaluated before the assignee
branch, so a creator who is also the assignee keeps full rights.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol, Union

from taskflow.core.errors import ApiError, AuthorizationError, ValidationError

ADMIN_ROLE = "admin"

# Fields a creator or admin may change. created_by is intentionally absent.
TASK_UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {"title", "description", "status", "priority", "due_date", "assigned_to"}
)
ASSIGNEE_UPDATABLE_FIELDS: frozenset[str] = frozenset({"status"})


class Actor(Protocol):
    id: str
    role: str


class TaskRef(Protocol):
    created_by: str
    assigned_to: str | None


@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class AllowPartial:
    fields: frozenset[str]


@dataclass(frozen=True)
class Deny:
    reason: str
    status_code: int = 403


Decision = Union[Allow, AllowPartial, Deny]

ALLOW = Allow()


def is_admin(actor: Actor) -> bool:
    return actor.role == ADMIN_ROLE


def is_creator(actor: Actor, task: TaskRef) -> bool:
    return task.created_by == actor.id


def is_assignee(actor: Actor, task: TaskRef) -> bool:
    return task.assigned_to is not None and task.assigned_to == actor.id


def can_view_task(actor: Actor, task: TaskRef) -> bool:
    """Admin sees everything; others only tasks they created or are assigned to."""
    return is_admin(actor) or is_creator(actor, task) or is_assignee(actor, task)


def decide_view_task(actor: Actor, task: TaskRef) -> Decision:
    if can_view_task(actor, task):
        return ALLOW
    return Deny("Forbidden: You do not have permission to access this task")


def decide_update_task(actor: Actor, task: TaskRef, fields: Iterable[str]) -> Decision:
    """
    Decide an update given the set of fields the caller supplied.

    Creator/admin: full field set. Assignee: status only, and the request must
    contain status and nothing else. Anyone else: denied.
    """
    supplied = frozenset(fields) & TASK_UPDATABLE_FIELDS

    if is_admin(actor) or is_creator(actor, task):
        if not supplied:
            return Deny("No valid fields to update", status_code=400)
        return ALLOW

    if is_assignee(actor, task):
        if not supplied:
            return Deny("Assignees can only update task status", status_code=400)
        if supplied - ASSIGNEE_UPDATABLE_FIELDS:
            return Deny("Assignees can only update task status")
        return AllowPartial(ASSIGNEE_UPDATABLE_FIELDS)

    return Deny("Forbidden: You do not have permission to update this task")


def decide_delete_task(actor: Actor, task: TaskRef) -> Decision:
    if is_admin(actor) or is_creator(actor, task):
        return ALLOW
    return Deny("Forbidden: Only the creator or admin can delete this task")


def decide_manage_users(actor: Actor) -> Decision:
    """Listing users, changing roles and deleting users are admin-only."""
    if is_admin(actor):
        return ALLOW
    return Deny("Admin access required")


def decide_delete_user(actor: Actor, target_id: str) -> Decision:
    """Self-deletion is refused regardless of role; otherwise admin-only."""
    if target_id == actor.id:
        return Deny("Cannot delete your own account", status_code=400)
    return decide_manage_users(actor)


def enforce(decision: Decision) -> Decision:
    """Return the decision unchanged when it allows; raise the matching error on Deny."""
    if isinstance(decision, Deny):
        if decision.status_code == 403:
            raise AuthorizationError(decision.reason)
        if decision.status_code == 400:
            raise ValidationError(decision.reason)
        raise ApiError(decision.reason, decision.status_code)
    return decision


def permitted_fields(decision: Decision, supplied: Iterable[str]) -> frozenset[str]:
    """Intersect the supplied fields with what the decision allows."""
    supplied_set = frozenset(supplied) & TASK_UPDATABLE_FIELDS
    if isinstance(decision, AllowPartial):
        return supplied_set & decision.fields
    if isinstance(decision, Allow):
        return supplied_set
    return frozenset()
