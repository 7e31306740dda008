"""Task persistence: role-scoped listing, single-row writes and statistics."""

from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from taskflow.models import Task
from taskflow.schemas.task import PriorityCounts, StatusCounts, TaskStats
from taskflow.services.policy import Actor, is_admin
from taskflow.services.validation import parse_due_date


def _strip(value: str | None) -> str | None:
    return value.strip() if isinstance(value, str) else value


def visible_tasks(db: Session, actor: Actor) -> Query:
    """Base query: every task for an admin, else tasks the actor created or is assigned to."""
    query = db.query(Task)
    if not is_admin(actor):
        query = query.filter(or_(Task.created_by == actor.id, Task.assigned_to == actor.id))
    return query


def list_tasks(
    db: Session,
    actor: Actor,
    status: str | None = None,
    priority: str | None = None,
    search: str | None = None,
) -> list[Task]:
    """Visible tasks filtered by status/priority and a case-insensitive title search, newest first."""
    query = visible_tasks(db, actor)
    if status:
        query = query.filter(Task.status == status)
    if priority:
        query = query.filter(Task.priority == priority)
    if search:
        query = query.filter(Task.title.icontains(search, autoescape=True))
    return query.order_by(Task.created_at.desc()).all()


def get_task(db: Session, task_id: str) -> Task | None:
    return db.query(Task).filter(Task.id == task_id).first()


def create_task(db: Session, actor: Actor, data: Mapping[str, Any]) -> Task:
    """Insert a task owned by actor. data has already passed validate_task_create."""
    task = Task(
        title=data["title"].strip(),
        description=_strip(data.get("description")),
        status=data.get("status") or "pending",
        priority=data.get("priority") or "medium",
        due_date=parse_due_date(data.get("due_date")),
        created_by=actor.id,
        assigned_to=data.get("assigned_to") or None,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def update_task(
    db: Session, task: Task, data: Mapping[str, Any], fields: Iterable[str]
) -> Task:
    """Apply only the permitted fields from data to task. created_by is never touched."""
    for field in fields:
        value = data[field]
        if field in ("title", "description"):
            value = _strip(value)
        elif field == "due_date":
            value = parse_due_date(value)
        elif field == "assigned_to":
            value = value or None
        setattr(task, field, value)
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task: Task) -> None:
    db.delete(task)
    db.commit()


def task_stats(db: Session, actor: Actor) -> TaskStats:
    """Fetch the actor's visible tasks and count them by status and priority."""
    tasks = visible_tasks(db, actor).all()
    by_status = Counter(t.status for t in tasks)
    by_priority = Counter(t.priority for t in tasks)
    return TaskStats(
        total=len(tasks),
        by_status=StatusCounts(
            completed=by_status["completed"],
            pending=by_status["pending"],
            in_progress=by_status["in_progress"],
        ),
        by_priority=PriorityCounts(
            high=by_priority["high"],
            medium=by_priority["medium"],
            low=by_priority["low"],
        ),
        user_role=actor.role,
    )
