"""
Request-scoped dependencies.

Authenticates the bearer token and assembles the RequestContext that every
service receives.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.database import get_db
from taskboard.core.security import verify_access_token
from taskboard.models.user import User
from taskboard.services.identity_service import IdentityService, SqlIdentityService
from taskboard.store.base import RowStore
from taskboard.store.sql import SqlRowStore

# A missing header must map to our own 401 body, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def _credentials_error(code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"code": code, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to an active user.

    401 MISSING_TOKEN, INVALID_TOKEN or USER_NOT_FOUND otherwise.
    """
    if credentials is None:
        raise _credentials_error("MISSING_TOKEN", "Authorization header required")

    try:
        claims = verify_access_token(credentials.credentials)
        user_id = UUID(str(claims.get("sub")))
    except (JWTError, ValueError):
        raise _credentials_error("INVALID_TOKEN", "Token is invalid or expired")

    user = await db.get(User, user_id)
    if user is None or not user.is_active:
        raise _credentials_error("USER_NOT_FOUND", "User not found or inactive")

    return user


@dataclass(frozen=True)
class RequestContext:
    """Caller identity plus the collaborators a service works through."""

    user: User
    store: RowStore
    identity: IdentityService

    @property
    def user_id(self) -> UUID:
        return self.user.id


async def get_request_context(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> RequestContext:
    return RequestContext(
        user=current_user,
        store=SqlRowStore(db),
        identity=SqlIdentityService(db),
    )
