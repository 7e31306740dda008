"""ORM model for tasks."""

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, String, Text, func

from taskflow.models.base import Base, new_id, utcnow


class Task(Base):
    """
    A unit of work created by one user and optionally assigned to another.

    created_by is set at creation and never updated. Deleting the creator deletes
    the task; deleting the assignee leaves the task unassigned.
    """

    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'in_progress', 'completed')", name="ck_tasks_status"
        ),
        CheckConstraint("priority IN ('low', 'medium', 'high')", name="ck_tasks_priority"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(32), nullable=False, default="pending", server_default="pending")
    priority = Column(String(16), nullable=False, default="medium", server_default="medium")
    due_date = Column(Date, nullable=True)
    created_by = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    assigned_to = Column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True,
    )
