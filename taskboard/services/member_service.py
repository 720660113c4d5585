"""
Member business logic.

Handles listing, removing and re-roling workspace members. A workspace always
keeps at least one member.
"""

from __future__ import annotations

import logging
from uuid import UUID

from taskboard.core.dependencies import RequestContext
from taskboard.core.errors import bad_request, unauthorized
from taskboard.models.member import Member, MemberRole
from taskboard.schemas.common import IdResponse
from taskboard.schemas.member import MemberResponse, MembersListResponse
from taskboard.services.identity_service import UserIdentity
from taskboard.services.membership import require_membership, require_role
from taskboard.store.predicates import Equals, OrderBy

logger = logging.getLogger(__name__)


class MemberService:
    """Handles all member operations."""

    def __init__(self, ctx: RequestContext) -> None:
        self.ctx = ctx
        self.store = ctx.store

    async def list_members(self, workspace_id: UUID) -> MembersListResponse:
        """List all members of a workspace with identity details."""
        await require_membership(self.store, workspace_id, self.ctx.user_id)

        page = await self.store.list_rows(
            Member,
            [Equals("workspace_id", workspace_id), OrderBy("joined_at")],
        )

        identities: dict[UUID, UserIdentity | None] = {}
        for member in page.rows:
            if member.user_id not in identities:
                identities[member.user_id] = await self.ctx.identity.get_user(member.user_id)

        members = [
            MemberResponse(
                id=member.id,
                workspace_id=member.workspace_id,
                user_id=member.user_id,
                role=member.role,
                joined_at=member.joined_at,
                name=identity.name,
                email=identity.email,
            )
            for member in page.rows
            if (identity := identities[member.user_id]) is not None
        ]

        return MembersListResponse(members=members, total=len(members))

    async def remove_member(self, member_id: UUID) -> IdResponse:
        """
        Remove a member from its workspace.

        - Any member may remove themselves
        - Only an Admin may remove someone else
        - The last member cannot be removed
        """
        target, acting = await self._load_target_and_actor(member_id)

        if acting.id != target.id:
            require_role(acting, MemberRole.ADMIN)

        await self._ensure_not_last_member(target.workspace_id)

        await self.store.delete_row(Member, target.id)
        logger.info(
            "Member removed: member_id=%s workspace_id=%s by user_id=%s",
            target.id, target.workspace_id, self.ctx.user_id,
        )
        return IdResponse(id=target.id)

    async def update_member_role(self, member_id: UUID, role: MemberRole) -> IdResponse:
        """
        Change a member's role. Admin only.

        The role of the last member cannot be changed.
        """
        target, acting = await self._load_target_and_actor(member_id)
        require_role(acting, MemberRole.ADMIN)

        await self._ensure_not_last_member(target.workspace_id)

        await self.store.update_row(Member, target.id, {"role": role})
        logger.info(
            "Member role changed: member_id=%s role=%s by user_id=%s",
            target.id, role.value, self.ctx.user_id,
        )
        return IdResponse(id=target.id)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    async def _load_target_and_actor(self, member_id: UUID) -> tuple[Member, Member]:
        target = await self.store.get_row(Member, member_id)
        if target is None:
            raise unauthorized()
        acting = await require_membership(self.store, target.workspace_id, self.ctx.user_id)
        return target, acting

    async def _ensure_not_last_member(self, workspace_id: UUID) -> None:
        page = await self.store.list_rows(Member, [Equals("workspace_id", workspace_id)])
        if page.total <= 1:
            raise bad_request("LAST_MEMBER", "A workspace must keep at least one member")
