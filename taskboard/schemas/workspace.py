"""
Workspace schemas.

Request/response models for workspace endpoints.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class WorkspaceCreateRequest(BaseModel):
    """Request body for POST /workspaces."""

    name: str = Field(min_length=1, max_length=100)
    image_url: str | None = Field(default=None, max_length=2048)


class WorkspaceUpdateRequest(BaseModel):
    """Request body for PATCH /workspaces/{workspace_id}."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    image_url: str | None = Field(default=None, max_length=2048)


class WorkspaceJoinRequest(BaseModel):
    """Request body for POST /workspaces/{workspace_id}/join."""

    code: str = Field(min_length=1, max_length=32)


class WorkspaceResponse(BaseModel):
    id: UUID
    name: str
    user_id: UUID
    image_url: str | None
    invite_code: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class WorkspaceListResponse(BaseModel):
    workspaces: list[WorkspaceResponse]
    total: int
