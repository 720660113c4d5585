"""
Project business logic.

Handles project CRUD operations. Any workspace member may manage projects.
"""

from __future__ import annotations

from uuid import UUID

from taskboard.core.dependencies import RequestContext
from taskboard.core.errors import unauthorized
from taskboard.models.project import Project
from taskboard.schemas.project import (
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdateRequest,
)
from taskboard.services.membership import require_membership
from taskboard.store.predicates import Equals, OrderBy


class ProjectService:

    def __init__(self, ctx: RequestContext) -> None:
        self.ctx = ctx
        self.store = ctx.store

    async def list_projects(self, workspace_id: UUID) -> ProjectListResponse:
        await require_membership(self.store, workspace_id, self.ctx.user_id)
        page = await self.store.list_rows(
            Project,
            [Equals("workspace_id", workspace_id), OrderBy("created_at", descending=True)],
        )
        return ProjectListResponse(
            projects=[ProjectResponse.model_validate(p) for p in page.rows],
            total=page.total,
        )

    async def create_project(self, data: ProjectCreateRequest) -> ProjectResponse:
        await require_membership(self.store, data.workspace_id, self.ctx.user_id)
        project = await self.store.create_row(
            Project,
            {
                "workspace_id": data.workspace_id,
                "name": data.name,
                "image_url": data.image_url,
            },
        )
        return ProjectResponse.model_validate(project)

    async def get_project(self, project_id: UUID) -> ProjectResponse:
        project = await self._get_authorized_project(project_id)
        return ProjectResponse.model_validate(project)

    async def update_project(
        self, project_id: UUID, data: ProjectUpdateRequest
    ) -> ProjectResponse:
        await self._get_authorized_project(project_id)
        changes = {
            field: getattr(data, field)
            for field in data.model_fields_set
            if getattr(data, field) is not None or field == "image_url"
        }
        project = await self.store.update_row(Project, project_id, changes)
        if project is None:
            raise unauthorized()
        return ProjectResponse.model_validate(project)

    async def _get_authorized_project(self, project_id: UUID) -> Project:
        project = await self.store.get_row(Project, project_id)
        if project is None:
            raise unauthorized()
        await require_membership(self.store, project.workspace_id, self.ctx.user_id)
        return project
