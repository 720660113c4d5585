"""
Membership resolution and role checks.

Every workspace-scoped operation goes through require_membership before it
reads or writes anything else in that workspace.
"""

from __future__ import annotations

from uuid import UUID

from taskboard.core.errors import unauthorized
from taskboard.models.member import Member, MemberRole
from taskboard.store.base import RowStore
from taskboard.store.predicates import Equals, Limit


async def resolve_membership(
    store: RowStore, workspace_id: UUID, user_id: UUID
) -> Member | None:
    """Return the caller's member row in the workspace, or None."""
    page = await store.list_rows(
        Member,
        [
            Equals("workspace_id", workspace_id),
            Equals("user_id", user_id),
            Limit(1),
        ],
    )
    return page.rows[0] if page.rows else None


async def require_membership(
    store: RowStore, workspace_id: UUID, user_id: UUID
) -> Member:
    member = await resolve_membership(store, workspace_id, user_id)
    if member is None:
        raise unauthorized()
    return member


def require_role(member: Member, *roles: MemberRole) -> Member:
    """Reject the caller unless their role is one of `roles`."""
    if member.role not in roles:
        raise unauthorized()
    return member
