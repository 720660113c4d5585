"""
Workspace business logic.

Handles workspace creation, admin-only settings, invite codes and joining.
"""

from __future__ import annotations

import logging
import secrets
import string
from uuid import UUID

from taskboard.core.config import settings
from taskboard.core.dependencies import RequestContext
from taskboard.core.errors import bad_request, unauthorized
from taskboard.models.member import Member, MemberRole
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.workspace import Workspace
from taskboard.schemas.common import IdResponse
from taskboard.schemas.workspace import (
    WorkspaceCreateRequest,
    WorkspaceListResponse,
    WorkspaceResponse,
    WorkspaceUpdateRequest,
)
from taskboard.services.membership import require_membership, require_role, resolve_membership
from taskboard.store.predicates import Contains, Equals, OrderBy

logger = logging.getLogger(__name__)

INVITE_CODE_ALPHABET = string.ascii_letters + string.digits


def generate_invite_code(length: int | None = None) -> str:
    length = length or settings.INVITE_CODE_LENGTH
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


class WorkspaceService:
    """Handles all workspace operations."""

    def __init__(self, ctx: RequestContext) -> None:
        self.ctx = ctx
        self.store = ctx.store

    # -----------------------------------------------------------------------
    # List / Create / Get
    # -----------------------------------------------------------------------

    async def list_workspaces(self) -> WorkspaceListResponse:
        """Workspaces the caller is a member of, newest first."""
        memberships = await self.store.list_rows(
            Member, [Equals("user_id", self.ctx.user_id)]
        )
        if not memberships.rows:
            return WorkspaceListResponse(workspaces=[], total=0)

        workspace_ids = tuple({m.workspace_id for m in memberships.rows})
        page = await self.store.list_rows(
            Workspace,
            [Contains("id", workspace_ids), OrderBy("created_at", descending=True)],
        )
        return WorkspaceListResponse(
            workspaces=[WorkspaceResponse.model_validate(w) for w in page.rows],
            total=page.total,
        )

    async def create_workspace(self, data: WorkspaceCreateRequest) -> WorkspaceResponse:
        """
        Create a workspace.

        - Generates an invite code
        - Adds the creator as its first Admin member
        """
        workspace = await self.store.create_row(
            Workspace,
            {
                "name": data.name,
                "user_id": self.ctx.user_id,
                "image_url": data.image_url,
                "invite_code": generate_invite_code(),
            },
        )
        await self.store.create_row(
            Member,
            {
                "workspace_id": workspace.id,
                "user_id": self.ctx.user_id,
                "role": MemberRole.ADMIN,
            },
        )
        logger.info("Workspace created: workspace_id=%s user_id=%s", workspace.id, self.ctx.user_id)
        return WorkspaceResponse.model_validate(workspace)

    async def get_workspace(self, workspace_id: UUID) -> WorkspaceResponse:
        await require_membership(self.store, workspace_id, self.ctx.user_id)
        workspace = await self._get_workspace(workspace_id)
        return WorkspaceResponse.model_validate(workspace)

    # -----------------------------------------------------------------------
    # Admin operations
    # -----------------------------------------------------------------------

    async def update_workspace(
        self, workspace_id: UUID, data: WorkspaceUpdateRequest
    ) -> WorkspaceResponse:
        member = await require_membership(self.store, workspace_id, self.ctx.user_id)
        require_role(member, MemberRole.ADMIN)

        changes = {
            field: getattr(data, field)
            for field in data.model_fields_set
            if getattr(data, field) is not None or field == "image_url"
        }
        workspace = await self.store.update_row(Workspace, workspace_id, changes)
        if workspace is None:
            raise unauthorized()
        return WorkspaceResponse.model_validate(workspace)

    async def delete_workspace(self, workspace_id: UUID) -> IdResponse:
        """
        Delete a workspace and everything scoped to it.

        Tasks go first, then projects and members, then the workspace row.
        """
        member = await require_membership(self.store, workspace_id, self.ctx.user_id)
        require_role(member, MemberRole.ADMIN)

        scope = [Equals("workspace_id", workspace_id)]
        tasks = await self.store.delete_rows(Task, scope)
        projects = await self.store.delete_rows(Project, scope)
        members = await self.store.delete_rows(Member, scope)
        await self.store.delete_row(Workspace, workspace_id)

        logger.info(
            "Workspace deleted: workspace_id=%s tasks=%d projects=%d members=%d",
            workspace_id, tasks, projects, members,
        )
        return IdResponse(id=workspace_id)

    async def reset_invite_code(self, workspace_id: UUID) -> WorkspaceResponse:
        member = await require_membership(self.store, workspace_id, self.ctx.user_id)
        require_role(member, MemberRole.ADMIN)

        workspace = await self.store.update_row(
            Workspace, workspace_id, {"invite_code": generate_invite_code()}
        )
        if workspace is None:
            raise unauthorized()
        return WorkspaceResponse.model_validate(workspace)

    # -----------------------------------------------------------------------
    # Join
    # -----------------------------------------------------------------------

    async def join_workspace(self, workspace_id: UUID, code: str) -> WorkspaceResponse:
        """
        Join a workspace as a plain member using its invite code.

        An unknown workspace and a wrong code give the same error.
        """
        existing = await resolve_membership(self.store, workspace_id, self.ctx.user_id)
        if existing is not None:
            raise bad_request("ALREADY_MEMBER", "You are already a member of this workspace")

        workspace = await self.store.get_row(Workspace, workspace_id)
        if workspace is None or not secrets.compare_digest(
            workspace.invite_code.encode(), code.encode()
        ):
            raise bad_request("INVALID_INVITE_CODE", "Invalid invite code")

        await self.store.create_row(
            Member,
            {
                "workspace_id": workspace_id,
                "user_id": self.ctx.user_id,
                "role": MemberRole.MEMBER,
            },
        )
        logger.info("User joined workspace: workspace_id=%s user_id=%s", workspace_id, self.ctx.user_id)
        return WorkspaceResponse.model_validate(workspace)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    async def _get_workspace(self, workspace_id: UUID) -> Workspace:
        workspace = await self.store.get_row(Workspace, workspace_id)
        if workspace is None:
            raise unauthorized()
        return workspace
