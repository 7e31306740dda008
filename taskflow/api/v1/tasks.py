"""Task endpoints: role-scoped listing, CRUD with ownership checks, and statistics."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from taskflow.api.v1.auth import get_current_user
from taskflow.core.database import get_db
from taskflow.core.errors import NotFoundError, ValidationError
from taskflow.models import Task
from taskflow.schemas.auth import CurrentUser
from taskflow.schemas.common import MessageResponse
from taskflow.schemas.task import (
    TaskCreateRequest,
    TaskListResponse,
    TaskOut,
    TaskResponse,
    TaskStatsResponse,
    TaskUpdateRequest,
)
from taskflow.services import tasks, users
from taskflow.services.policy import (
    decide_delete_task,
    decide_update_task,
    decide_view_task,
    enforce,
    permitted_fields,
)
from taskflow.services.validation import (
    validate_query_filters,
    validate_task_create,
    validate_task_update,
)

router = APIRouter()


def _require_task(db: Session, task_id: str) -> Task:
    task = tasks.get_task(db, task_id)
    if task is None:
        raise NotFoundError("Task not found")
    return task


def _check_assignee(db: Session, assigned_to: str | None) -> None:
    if assigned_to and users.get_user(db, assigned_to) is None:
        raise ValidationError("Assigned user does not exist")


@router.get("/stats", response_model=TaskStatsResponse)
def get_task_stats(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskStatsResponse:
    """Counts of visible tasks by status and priority (all tasks for admins)."""
    return TaskStatsResponse(stats=tasks.task_stats(db, current_user))


@router.get("", response_model=TaskListResponse)
def list_tasks(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    priority: str | None = None,
    search: str | None = None,
) -> TaskListResponse:
    """
    List tasks the caller created or is assigned to (every task for admins).

    Optional filters: status, priority (exact match) and search (case-insensitive
    substring of the title). Newest first.
    """
    error = validate_query_filters({"status": status_filter, "priority": priority})
    if error:
        raise ValidationError(error)
    rows = tasks.list_tasks(
        db, current_user, status=status_filter, priority=priority, search=search
    )
    return TaskListResponse(
        count=len(rows), tasks=[TaskOut.model_validate(t) for t in rows]
    )


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    body: TaskCreateRequest | None = None,
) -> TaskResponse:
    """Create a task; the caller becomes its creator. Status defaults to pending, priority to medium."""
    data = body.supplied() if body else {}
    error = validate_task_create(data)
    if error:
        raise ValidationError(error)
    _check_assignee(db, data.get("assigned_to"))

    task = tasks.create_task(db, current_user, data)
    return TaskResponse(message="Task created successfully", task=TaskOut.model_validate(task))


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskResponse:
    """Fetch one task. 404 when absent, 403 when it exists but is not visible to the caller."""
    task = _require_task(db, task_id)
    enforce(decide_view_task(current_user, task))
    return TaskResponse(task=TaskOut.model_validate(task))


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    body: TaskUpdateRequest | None = None,
) -> TaskResponse:
    """
    Partially update a task.

    Creator or admin may change any field; the assignee may change status only.
    """
    data = body.supplied() if body else {}
    error = validate_task_update(data)
    if error:
        raise ValidationError(error)

    task = _require_task(db, task_id)
    decision = enforce(decide_update_task(current_user, task, data.keys()))
    fields = permitted_fields(decision, data.keys())
    if "assigned_to" in fields:
        _check_assignee(db, data["assigned_to"])

    task = tasks.update_task(db, task, data, fields)
    return TaskResponse(message="Task updated successfully", task=TaskOut.model_validate(task))


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a task (creator or admin only)."""
    task = _require_task(db, task_id)
    enforce(decide_delete_task(current_user, task))
    tasks.delete_task(db, task)
    return MessageResponse(message="Task deleted successfully")
