"""
Workspace service tests: creation, admin operations, invite codes and joining.
"""

import uuid

import pytest
from fastapi import HTTPException

from taskboard.models import Member, MemberRole, Project, Task, Workspace
from taskboard.schemas.workspace import WorkspaceCreateRequest, WorkspaceUpdateRequest
from taskboard.services.workspace_service import INVITE_CODE_ALPHABET, WorkspaceService, generate_invite_code
from taskboard.store.predicates import Equals
from taskboard.store.sql import SqlRowStore

from tests.conftest import context_for, make_task, make_user


def test_invite_code_shape():
    code = generate_invite_code()
    assert len(code) == 6
    assert set(code) <= set(INVITE_CODE_ALPHABET)


@pytest.mark.asyncio
async def test_create_makes_creator_admin(db):
    user = await make_user(db, "Founder")
    service = WorkspaceService(context_for(db, user))

    workspace = await service.create_workspace(WorkspaceCreateRequest(name="Acme"))

    page = await SqlRowStore(db).list_rows(Member, [Equals("workspace_id", workspace.id)])
    [member] = page.rows
    assert member.user_id == user.id
    assert member.role == MemberRole.ADMIN
    assert workspace.user_id == user.id
    assert len(workspace.invite_code) == 6


@pytest.mark.asyncio
async def test_list_only_shows_own_workspaces(db, board):
    service = WorkspaceService(context_for(db, board.bob))
    await service.create_workspace(WorkspaceCreateRequest(name="Bob's"))

    result = await service.list_workspaces()
    assert {w.name for w in result.workspaces} == {"Workspace", "Bob's"}

    empty = await WorkspaceService(context_for(db, board.outsider)).list_workspaces()
    assert empty.total == 0


@pytest.mark.asyncio
async def test_get_requires_membership(db, board):
    got = await WorkspaceService(context_for(db, board.bob)).get_workspace(board.workspace.id)
    assert got.id == board.workspace.id

    for user, workspace_id in ((board.outsider, board.workspace.id), (board.alice, uuid.uuid4())):
        with pytest.raises(HTTPException) as exc:
            await WorkspaceService(context_for(db, user)).get_workspace(workspace_id)
        assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_update_is_admin_only(db, board):
    updated = await WorkspaceService(context_for(db, board.alice)).update_workspace(
        board.workspace.id, WorkspaceUpdateRequest(name="Renamed")
    )
    assert updated.name == "Renamed"

    with pytest.raises(HTTPException) as exc:
        await WorkspaceService(context_for(db, board.bob)).update_workspace(
            board.workspace.id, WorkspaceUpdateRequest(name="Nope")
        )
    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_reset_invite_code(db, board):
    old_code = board.workspace.invite_code

    with pytest.raises(HTTPException):
        await WorkspaceService(context_for(db, board.bob)).reset_invite_code(board.workspace.id)

    result = await WorkspaceService(context_for(db, board.alice)).reset_invite_code(board.workspace.id)
    assert result.invite_code != old_code
    assert len(result.invite_code) == 6


@pytest.mark.asyncio
async def test_delete_cascades(db, board):
    await make_task(db, board.workspace, board.project, board.admin)

    with pytest.raises(HTTPException):
        await WorkspaceService(context_for(db, board.bob)).delete_workspace(board.workspace.id)

    result = await WorkspaceService(context_for(db, board.alice)).delete_workspace(board.workspace.id)

    assert result.id == board.workspace.id
    store = SqlRowStore(db)
    scope = [Equals("workspace_id", board.workspace.id)]
    assert (await store.list_rows(Task, scope)).rows == []
    assert (await store.list_rows(Project, scope)).rows == []
    assert (await store.list_rows(Member, scope)).rows == []
    assert await store.get_row(Workspace, board.workspace.id) is None


# ---------------------------------------------------------------------------
# Join
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_join_with_code(db, board):
    service = WorkspaceService(context_for(db, board.outsider))

    joined = await service.join_workspace(board.workspace.id, board.workspace.invite_code)

    assert joined.id == board.workspace.id
    page = await SqlRowStore(db).list_rows(
        Member,
        [Equals("workspace_id", board.workspace.id), Equals("user_id", board.outsider.id)],
    )
    assert page.rows[0].role == MemberRole.MEMBER


@pytest.mark.asyncio
async def test_join_rejections(db, board):
    service = WorkspaceService(context_for(db, board.outsider))

    for workspace_id, code in ((board.workspace.id, "wrong!"), (uuid.uuid4(), "abc123")):
        with pytest.raises(HTTPException) as exc:
            await service.join_workspace(workspace_id, code)
        assert exc.value.status_code == 400
        assert exc.value.detail["code"] == "INVALID_INVITE_CODE"

    with pytest.raises(HTTPException) as exc:
        await WorkspaceService(context_for(db, board.bob)).join_workspace(
            board.workspace.id, board.workspace.invite_code
        )
    assert exc.value.detail["code"] == "ALREADY_MEMBER"
