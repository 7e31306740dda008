"""Pydantic schemas for task endpoints.

Request fields are all optional at the schema level: required-ness, enum
membership and date format are checked by services.validation so the client
gets a single 400 message instead of a list of schema errors.
"""

from datetime import date, datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from taskflow.schemas.common import Envelope


class _TaskFields(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, description="Task title (max 200 chars)")
    description: str | None = None
    status: str | None = Field(default=None, description="pending | in_progress | completed")
    priority: str | None = Field(default=None, description="low | medium | high")
    due_date: str | None = Field(
        default=None,
        validation_alias=AliasChoices("dueDate", "due_date"),
        description="ISO date (YYYY-MM-DD) or datetime",
    )
    assigned_to: str | None = Field(
        default=None,
        validation_alias=AliasChoices("assigned_to", "assignedTo"),
        description="Id of the user the task is delegated to",
    )

    def supplied(self) -> dict:
        """Only the fields present in the request body (partial-update semantics)."""
        return self.model_dump(exclude_unset=True)


class TaskCreateRequest(_TaskFields):
    pass


class TaskUpdateRequest(_TaskFields):
    pass


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    status: str
    priority: str
    due_date: date | None = None
    created_by: str
    assigned_to: str | None = None
    created_at: datetime | None = None


class TaskResponse(Envelope):
    """Single task; message is set on create and update."""

    message: str | None = None
    task: TaskOut


class TaskListResponse(Envelope):
    count: int
    tasks: list[TaskOut]


class StatusCounts(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    completed: int = 0
    pending: int = 0
    in_progress: int = Field(default=0, alias="inProgress")


class PriorityCounts(BaseModel):
    high: int = 0
    medium: int = 0
    low: int = 0


class TaskStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    by_status: StatusCounts = Field(..., alias="byStatus")
    by_priority: PriorityCounts = Field(..., alias="byPriority")
    user_role: str = Field(..., alias="userRole")


class TaskStatsResponse(Envelope):
    stats: TaskStats
