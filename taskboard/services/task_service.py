"""
Task business logic.

Handles task listing, CRUD and board reorder.
Every operation resolves the caller's membership in the task's workspace
before touching anything else.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from taskboard.core.dependencies import RequestContext
from taskboard.core.errors import bad_request, not_found, unauthorized
from taskboard.models.member import Member
from taskboard.models.project import Project
from taskboard.models.task import Task
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
from taskboard.services.membership import require_membership
from taskboard.services.position import PositionAllocator
from taskboard.services.task_populator import TaskPopulator
from taskboard.services.task_query import build_task_query

logger = logging.getLogger(__name__)


class TaskService:
    """Handles all task operations."""

    def __init__(self, ctx: RequestContext) -> None:
        self.ctx = ctx
        self.store = ctx.store
        self.positions = PositionAllocator(ctx.store)
        self.populator = TaskPopulator(ctx.store, ctx.identity)

    # -----------------------------------------------------------------------
    # List Tasks
    # -----------------------------------------------------------------------

    async def list_tasks(self, filters: TaskFilters) -> TaskListResponse:
        """List one page of a workspace's tasks, newest first, populated."""
        await require_membership(self.store, filters.workspace_id, self.ctx.user_id)

        page = await self.store.list_rows(Task, build_task_query(filters))
        tasks = await self.populator.populate(page.rows)

        return TaskListResponse(
            tasks=tasks,
            total=page.total,
            skip=filters.skip,
            limit=filters.limit,
        )

    # -----------------------------------------------------------------------
    # Get Task Detail
    # -----------------------------------------------------------------------

    async def get_task(self, task_id: UUID) -> PopulatedTaskResponse:
        task = await self._get_authorized_task(task_id)
        populated = await self.populator.populate([task])
        return populated[0]

    # -----------------------------------------------------------------------
    # Create Task
    # -----------------------------------------------------------------------

    async def create_task(self, data: TaskCreateRequest) -> TaskResponse:
        """
        Create a task at the end of its status bucket.

        The project and assignee must both belong to the target workspace.
        """
        await require_membership(self.store, data.workspace_id, self.ctx.user_id)

        await self._verify_project_in_workspace(data.project_id, data.workspace_id)
        await self._verify_assignee_in_workspace(data.assignee_id, data.workspace_id)

        position = await self.positions.allocate(data.workspace_id, data.status)

        task = await self.store.create_row(
            Task,
            {
                "workspace_id": data.workspace_id,
                "project_id": data.project_id,
                "assignee_id": data.assignee_id,
                "name": data.name,
                "description": data.description or "",
                "due_date": data.due_date,
                "status": data.status,
                "position": position,
            },
        )

        logger.info(
            "Task created: task_id=%s workspace_id=%s status=%s position=%d",
            task.id, task.workspace_id, task.status.value, task.position,
        )
        return TaskResponse.model_validate(task)

    # -----------------------------------------------------------------------
    # Update Task
    # -----------------------------------------------------------------------

    async def update_task(self, task_id: UUID, data: TaskUpdateRequest) -> TaskResponse:
        """
        Partially update a task.

        Fields left out of the request are untouched. Changing status does not
        move the task within its new bucket; the board does that via reorder.
        """
        task = await self._get_authorized_task(task_id)

        changes: dict[str, Any] = {
            field: getattr(data, field)
            for field in data.model_fields_set
            if getattr(data, field) is not None or field == "description"
        }

        if "project_id" in changes and changes["project_id"] != task.project_id:
            await self._verify_project_in_workspace(changes["project_id"], task.workspace_id)
        if "assignee_id" in changes and changes["assignee_id"] != task.assignee_id:
            await self._verify_assignee_in_workspace(changes["assignee_id"], task.workspace_id)

        updated = await self.store.update_row(Task, task_id, changes)
        if updated is None:
            raise not_found("TASK_NOT_FOUND", "Task not found")

        return TaskResponse.model_validate(updated)

    # -----------------------------------------------------------------------
    # Delete Task
    # -----------------------------------------------------------------------

    async def delete_task(self, task_id: UUID) -> IdResponse:
        task = await self._get_authorized_task(task_id)

        deleted = await self.store.delete_row(Task, task.id)
        if not deleted:
            raise not_found("TASK_NOT_FOUND", "Task not found")

        logger.info("Task deleted: task_id=%s workspace_id=%s", task.id, task.workspace_id)
        return IdResponse(id=task.id)

    # -----------------------------------------------------------------------
    # Bulk Reorder
    # -----------------------------------------------------------------------

    async def bulk_update(self, data: BulkReorderRequest) -> BulkReorderResponse:
        tasks = await self.positions.reorder(self.ctx.user_id, data.tasks)
        return BulkReorderResponse(tasks=[TaskResponse.model_validate(t) for t in tasks])

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    async def _get_authorized_task(self, task_id: UUID) -> Task:
        """
        Load a task and check the caller belongs to its workspace.

        An unknown id is reported exactly like a non-member.
        """
        task = await self.store.get_row(Task, task_id)
        if task is None:
            raise unauthorized()
        await require_membership(self.store, task.workspace_id, self.ctx.user_id)
        return task

    async def _verify_project_in_workspace(self, project_id: UUID, workspace_id: UUID) -> None:
        project = await self.store.get_row(Project, project_id)
        if project is None or project.workspace_id != workspace_id:
            raise bad_request(
                "PROJECT_NOT_IN_WORKSPACE",
                "Project does not belong to this workspace",
            )

    async def _verify_assignee_in_workspace(self, member_id: UUID, workspace_id: UUID) -> None:
        member = await self.store.get_row(Member, member_id)
        if member is None or member.workspace_id != workspace_id:
            raise bad_request(
                "ASSIGNEE_NOT_IN_WORKSPACE",
                "Assignee is not a member of this workspace",
            )
