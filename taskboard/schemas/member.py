"""
Member schemas.

Request/response models for workspace member management endpoints.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from taskboard.models.member import MemberRole


class MemberResponse(BaseModel):
    """Member row enriched with the identity's display name and email."""

    id: UUID
    workspace_id: UUID
    user_id: UUID
    role: MemberRole
    joined_at: datetime
    name: str
    email: str


class MembersListResponse(BaseModel):
    """Response for GET /members."""

    members: list[MemberResponse]
    total: int


class MemberRoleUpdateRequest(BaseModel):
    """Request body for PATCH /members/{member_id}."""

    role: MemberRole
