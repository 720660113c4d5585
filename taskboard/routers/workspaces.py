"""
Workspace endpoints.

CRUD, invite code reset and join-by-code.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from taskboard.core.dependencies import RequestContext, get_request_context
from taskboard.schemas.common import IdResponse
from taskboard.schemas.workspace import (
    WorkspaceCreateRequest,
    WorkspaceJoinRequest,
    WorkspaceListResponse,
    WorkspaceResponse,
    WorkspaceUpdateRequest,
)
from taskboard.services.workspace_service import WorkspaceService

router = APIRouter()


def get_workspace_service(
    ctx: RequestContext = Depends(get_request_context),
) -> WorkspaceService:
    return WorkspaceService(ctx)


@router.get(
    "/workspaces",
    response_model=WorkspaceListResponse,
    summary="List workspaces the current user belongs to",
)
async def list_workspaces(
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceListResponse:
    return await service.list_workspaces()


@router.post(
    "/workspaces",
    response_model=WorkspaceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a workspace",
)
async def create_workspace(
    data: WorkspaceCreateRequest,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return await service.create_workspace(data)


@router.get(
    "/workspaces/{workspace_id}",
    response_model=WorkspaceResponse,
    summary="Get workspace details",
)
async def get_workspace(
    workspace_id: UUID,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return await service.get_workspace(workspace_id)


@router.patch(
    "/workspaces/{workspace_id}",
    response_model=WorkspaceResponse,
    summary="Update workspace (admin only)",
)
async def update_workspace(
    workspace_id: UUID,
    data: WorkspaceUpdateRequest,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return await service.update_workspace(workspace_id, data)


@router.delete(
    "/workspaces/{workspace_id}",
    response_model=IdResponse,
    summary="Delete workspace and its tasks, projects and members (admin only)",
)
async def delete_workspace(
    workspace_id: UUID,
    service: WorkspaceService = Depends(get_workspace_service),
) -> IdResponse:
    return await service.delete_workspace(workspace_id)


@router.post(
    "/workspaces/{workspace_id}/reset-invite-code",
    response_model=WorkspaceResponse,
    summary="Generate a new invite code (admin only)",
)
async def reset_invite_code(
    workspace_id: UUID,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return await service.reset_invite_code(workspace_id)


@router.post(
    "/workspaces/{workspace_id}/join",
    response_model=WorkspaceResponse,
    summary="Join a workspace with its invite code",
)
async def join_workspace(
    workspace_id: UUID,
    data: WorkspaceJoinRequest,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return await service.join_workspace(workspace_id, data.code)
