"""
Task endpoints.

Listing with filters, CRUD, and board bulk reorder.
"""

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from taskboard.core.config import settings
from taskboard.core.dependencies import RequestContext, get_request_context
from taskboard.models.task import TaskStatus
from taskboard.schemas.common import IdResponse
from taskboard.schemas.task import (
    BulkReorderRequest,
    BulkReorderResponse,
    PopulatedTaskResponse,
    TaskCreateRequest,
    TaskFilters,
    TaskListResponse,
    TaskResponse,
    TaskUpdateRequest,
)
from taskboard.services.task_service import TaskService

router = APIRouter()


def get_task_service(ctx: RequestContext = Depends(get_request_context)) -> TaskService:
    return TaskService(ctx)


# ---------------------------------------------------------------------------
# List Tasks
# ---------------------------------------------------------------------------

@router.get(
    "/tasks",
    response_model=TaskListResponse,
    summary="List tasks in a workspace",
)
async def list_tasks(
    workspace_id: UUID = Query(...),
    project_id: UUID | None = Query(default=None),
    assignee_id: UUID | None = Query(default=None),
    status_: TaskStatus | None = Query(default=None, alias="status"),
    due_date: date | None = Query(default=None),
    search: str | None = Query(default=None, max_length=200),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=settings.TASK_PAGE_SIZE, ge=1, le=settings.TASK_PAGE_SIZE_MAX),
    service: TaskService = Depends(get_task_service),
) -> TaskListResponse:
    filters = TaskFilters(
        workspace_id=workspace_id,
        project_id=project_id,
        assignee_id=assignee_id,
        status=status_,
        due_date=due_date,
        search=search,
        skip=skip,
        limit=limit,
    )
    return await service.list_tasks(filters)


# ---------------------------------------------------------------------------
# Create Task
# ---------------------------------------------------------------------------

@router.post(
    "/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
async def create_task(
    data: TaskCreateRequest,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return await service.create_task(data)


# ---------------------------------------------------------------------------
# Bulk Reorder
# ---------------------------------------------------------------------------

@router.post(
    "/tasks/bulk-update",
    response_model=BulkReorderResponse,
    summary="Move tasks between columns and positions",
)
async def bulk_update_tasks(
    data: BulkReorderRequest,
    service: TaskService = Depends(get_task_service),
) -> BulkReorderResponse:
    return await service.bulk_update(data)


# ---------------------------------------------------------------------------
# Single Task
# ---------------------------------------------------------------------------

@router.get(
    "/tasks/{task_id}",
    response_model=PopulatedTaskResponse,
    summary="Get task with project and assignee",
)
async def get_task(
    task_id: UUID,
    service: TaskService = Depends(get_task_service),
) -> PopulatedTaskResponse:
    return await service.get_task(task_id)


@router.patch(
    "/tasks/{task_id}",
    response_model=TaskResponse,
    summary="Update a task",
)
async def update_task(
    task_id: UUID,
    data: TaskUpdateRequest,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return await service.update_task(task_id, data)


@router.delete(
    "/tasks/{task_id}",
    response_model=IdResponse,
    summary="Delete a task",
)
async def delete_task(
    task_id: UUID,
    service: TaskService = Depends(get_task_service),
) -> IdResponse:
    return await service.delete_task(task_id)
