"""
Identity lookups.

Resolves a user id to the display name and email held by the identity
provider. Backed by the users table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.models.user import User


@dataclass(frozen=True)
class UserIdentity:
    id: UUID
    name: str
    email: str


class IdentityService(Protocol):

    async def get_user(self, user_id: UUID) -> UserIdentity | None: ...


class SqlIdentityService:

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_user(self, user_id: UUID) -> UserIdentity | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            return None
        return UserIdentity(id=user.id, name=user.display_name, email=user.email)
