"""
Task schemas.

Request/response models for task CRUD, listing and board reorder endpoints.
"""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.core.config import settings
from taskboard.models.member import MemberRole
from taskboard.models.task import TaskStatus
from taskboard.schemas.project import ProjectResponse

MIN_POSITION = 1000
MAX_POSITION = 1_000_000


# ---------------------------------------------------------------------------
# Task Create / Update
# ---------------------------------------------------------------------------

class TaskCreateRequest(BaseModel):
    """Request body for POST /tasks."""

    workspace_id: UUID
    project_id: UUID
    assignee_id: UUID
    name: str = Field(min_length=1, max_length=256)
    status: TaskStatus
    due_date: date
    description: str | None = None


class TaskUpdateRequest(BaseModel):
    """
    Request body for PATCH /tasks/{task_id}.

    Only fields present in the request body are written.
    """

    name: str | None = Field(default=None, min_length=1, max_length=256)
    status: TaskStatus | None = None
    project_id: UUID | None = None
    assignee_id: UUID | None = None
    due_date: date | None = None
    description: str | None = None


# ---------------------------------------------------------------------------
# Listing filters
# ---------------------------------------------------------------------------

class TaskFilters(BaseModel):
    """Immutable filter set for GET /tasks."""

    model_config = ConfigDict(frozen=True)

    workspace_id: UUID
    project_id: UUID | None = None
    assignee_id: UUID | None = None
    status: TaskStatus | None = None
    due_date: date | None = None
    search: str | None = Field(default=None, max_length=200)
    skip: int = Field(default=0, ge=0)
    limit: int = Field(default=settings.TASK_PAGE_SIZE, ge=1, le=settings.TASK_PAGE_SIZE_MAX)


# ---------------------------------------------------------------------------
# Bulk reorder (board drag-and-drop)
# ---------------------------------------------------------------------------

class TaskReorderItem(BaseModel):
    id: UUID
    status: TaskStatus
    position: int = Field(ge=MIN_POSITION, le=MAX_POSITION)


class BulkReorderRequest(BaseModel):
    """Request body for POST /tasks/bulk-update."""

    tasks: list[TaskReorderItem] = Field(min_length=1)

    @field_validator("tasks")
    @classmethod
    def ids_must_be_unique(cls, v: list[TaskReorderItem]) -> list[TaskReorderItem]:
        if len({item.id for item in v}) != len(v):
            raise ValueError("Each task may appear only once per batch")
        return v


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class TaskResponse(BaseModel):
    """Raw task row."""

    id: UUID
    workspace_id: UUID
    project_id: UUID
    assignee_id: UUID
    name: str
    description: str | None
    due_date: date
    status: TaskStatus
    position: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AssigneeResponse(BaseModel):
    """Member row enriched with the identity's display name and email."""

    id: UUID
    workspace_id: UUID
    user_id: UUID
    role: MemberRole
    name: str
    email: str


class PopulatedTaskResponse(TaskResponse):
    """Task with its project and assignee resolved at read time."""

    project: ProjectResponse | None = None
    assignee: AssigneeResponse | None = None


class TaskListResponse(BaseModel):
    """Response for GET /tasks."""

    tasks: list[PopulatedTaskResponse]
    total: int
    skip: int
    limit: int


class BulkReorderResponse(BaseModel):
    tasks: list[TaskResponse]
