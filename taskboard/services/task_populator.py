"""
Read-side task denormalization.

Attaches each task's project and assignee. Lookups are batched over the
distinct ids in the page: one project query, one member query, and one
identity lookup per distinct user behind those members.
"""

from __future__ import annotations

from typing import Sequence
from uuid import UUID

from taskboard.models.member import Member
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.schemas.project import ProjectResponse
from taskboard.schemas.task import AssigneeResponse, PopulatedTaskResponse, TaskResponse
from taskboard.services.identity_service import IdentityService, UserIdentity
from taskboard.store.base import RowStore
from taskboard.store.predicates import Contains


class TaskPopulator:

    def __init__(self, store: RowStore, identity: IdentityService) -> None:
        self.store = store
        self.identity = identity

    async def populate(self, tasks: Sequence[Task]) -> list[PopulatedTaskResponse]:
        """
        Resolve project and assignee for every task in the batch.

        A project or assignee id that no longer resolves leaves the matching
        field as None on that task; it never fails the batch.
        """
        if not tasks:
            return []

        project_ids = sorted({t.project_id for t in tasks}, key=str)
        assignee_ids = sorted({t.assignee_id for t in tasks}, key=str)

        projects = await self._load_projects(project_ids)
        assignees = await self._load_assignees(assignee_ids)

        return [
            PopulatedTaskResponse(
                **TaskResponse.model_validate(t).model_dump(),
                project=projects.get(t.project_id),
                assignee=assignees.get(t.assignee_id),
            )
            for t in tasks
        ]

    async def _load_projects(self, project_ids: list[UUID]) -> dict[UUID, ProjectResponse]:
        if not project_ids:
            return {}
        page = await self.store.list_rows(Project, [Contains("id", tuple(project_ids))])
        return {p.id: ProjectResponse.model_validate(p) for p in page.rows}

    async def _load_assignees(self, member_ids: list[UUID]) -> dict[UUID, AssigneeResponse]:
        if not member_ids:
            return {}
        page = await self.store.list_rows(Member, [Contains("id", tuple(member_ids))])

        identities: dict[UUID, UserIdentity | None] = {}
        for member in page.rows:
            if member.user_id not in identities:
                identities[member.user_id] = await self.identity.get_user(member.user_id)

        assignees: dict[UUID, AssigneeResponse] = {}
        for member in page.rows:
            user = identities[member.user_id]
            if user is None:
                continue
            assignees[member.id] = AssigneeResponse(
                id=member.id,
                workspace_id=member.workspace_id,
                user_id=member.user_id,
                role=member.role,
                name=user.name,
                email=user.email,
            )
        return assignees
