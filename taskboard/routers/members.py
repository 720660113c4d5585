"""
Workspace member endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from taskboard.core.dependencies import RequestContext, get_request_context
from taskboard.schemas.common import IdResponse
from taskboard.schemas.member import MemberRoleUpdateRequest, MembersListResponse
from taskboard.services.member_service import MemberService

router = APIRouter()


def get_member_service(ctx: RequestContext = Depends(get_request_context)) -> MemberService:
    return MemberService(ctx)


@router.get(
    "/members",
    response_model=MembersListResponse,
    summary="List members of a workspace",
)
async def list_members(
    workspace_id: UUID = Query(...),
    service: MemberService = Depends(get_member_service),
) -> MembersListResponse:
    return await service.list_members(workspace_id)


@router.patch(
    "/members/{member_id}",
    response_model=IdResponse,
    summary="Change a member's role (admin only)",
)
async def update_member_role(
    member_id: UUID,
    data: MemberRoleUpdateRequest,
    service: MemberService = Depends(get_member_service),
) -> IdResponse:
    return await service.update_member_role(member_id, data.role)


@router.delete(
    "/members/{member_id}",
    response_model=IdResponse,
    summary="Remove a member (self, or anyone as admin)",
)
async def remove_member(
    member_id: UUID,
    service: MemberService = Depends(get_member_service),
) -> IdResponse:
    return await service.remove_member(member_id)
