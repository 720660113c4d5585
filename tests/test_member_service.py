"""
Member service tests: listing, removal rules and role changes.
"""

import uuid

import pytest
from fastapi import HTTPException

from taskboard.models import Member, MemberRole, User, Workspace
from taskboard.services.member_service import MemberService

from tests.conftest import context_for, make_member, make_user, make_workspace


async def solo_workspace(db) -> tuple[User, Workspace, Member]:
    owner = await make_user(db, "Solo")
    workspace = await make_workspace(db, owner, "Solo space")
    admin = await make_member(db, workspace, owner, MemberRole.ADMIN)
    return owner, workspace, admin


@pytest.mark.asyncio
async def test_list_members_with_identity(db, board):
    result = await MemberService(context_for(db, board.bob)).list_members(board.workspace.id)

    assert result.total == 2
    by_name = {m.name: m for m in result.members}
    assert by_name["Alice"].role == MemberRole.ADMIN
    assert by_name["Alice"].email == board.alice.email
    assert by_name["Bob"].id == board.member.id


@pytest.mark.asyncio
async def test_list_members_requires_membership(db, board):
    with pytest.raises(HTTPException) as exc:
        await MemberService(context_for(db, board.outsider)).list_members(board.workspace.id)
    assert exc.value.status_code == 401


# ---------------------------------------------------------------------------
# Last member
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_last_member_cannot_leave(db):
    owner, _, admin = await solo_workspace(db)

    with pytest.raises(HTTPException) as exc:
        await MemberService(context_for(db, owner)).remove_member(admin.id)

    assert exc.value.status_code == 400
    assert exc.value.detail["code"] == "LAST_MEMBER"
    assert await db.get(Member, admin.id) is not None


@pytest.mark.asyncio
async def test_last_member_role_cannot_change(db):
    owner, _, admin = await solo_workspace(db)

    with pytest.raises(HTTPException) as exc:
        await MemberService(context_for(db, owner)).update_member_role(admin.id, MemberRole.MEMBER)

    assert exc.value.status_code == 400
    assert exc.value.detail["code"] == "LAST_MEMBER"


# ---------------------------------------------------------------------------
# Two members
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_admin_removes_member(db, board):
    result = await MemberService(context_for(db, board.alice)).remove_member(board.member.id)

    assert result.id == board.member.id
    assert await db.get(Member, board.member.id) is None


@pytest.mark.asyncio
async def test_admin_removes_self_when_another_member_remains(db, board):
    await MemberService(context_for(db, board.alice)).remove_member(board.admin.id)
    assert await db.get(Member, board.admin.id) is None


@pytest.mark.asyncio
async def test_member_leaves_on_their_own(db, board):
    await MemberService(context_for(db, board.bob)).remove_member(board.member.id)
    assert await db.get(Member, board.member.id) is None


@pytest.mark.asyncio
async def test_member_cannot_remove_someone_else(db, board):
    with pytest.raises(HTTPException) as exc:
        await MemberService(context_for(db, board.bob)).remove_member(board.admin.id)
    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_admin_changes_either_role(db, board):
    service = MemberService(context_for(db, board.alice))

    await service.update_member_role(board.member.id, MemberRole.ADMIN)
    await service.update_member_role(board.admin.id, MemberRole.MEMBER)

    assert (await db.get(Member, board.member.id)).role == MemberRole.ADMIN
    assert (await db.get(Member, board.admin.id)).role == MemberRole.MEMBER


@pytest.mark.asyncio
async def test_member_cannot_change_roles(db, board):
    with pytest.raises(HTTPException) as exc:
        await MemberService(context_for(db, board.bob)).update_member_role(board.member.id, MemberRole.ADMIN)
    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_outsider_and_unknown_member_are_unauthorized(db, board):
    with pytest.raises(HTTPException) as exc:
        await MemberService(context_for(db, board.outsider)).remove_member(board.member.id)
    assert exc.value.status_code == 401

    with pytest.raises(HTTPException) as exc:
        await MemberService(context_for(db, board.alice)).remove_member(uuid.uuid4())
    assert exc.value.status_code == 401
