"""
Access token handling.

Sessions are issued by the identity provider. This service verifies the
HS256 bearer tokens it receives; issue_access_token exists for local
development and tests.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from taskboard.core.config import settings

ACCESS_TOKEN_TYPE = "access"


def issue_access_token(user_id: str, expires_minutes: int | None = None) -> str:
    """Sign an access token whose subject is `user_id`."""
    issued_at = datetime.now(UTC)
    lifetime = timedelta(minutes=expires_minutes or settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    claims: dict[str, Any] = {
        "sub": user_id,
        "jti": uuid.uuid4().hex,
        "type": ACCESS_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def verify_access_token(token: str) -> dict[str, Any]:
    """
    Check signature, expiry and token type, and return the claims.

    Raises:
        JWTError: On any failure, including a non-access token.
    """
    claims = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    if claims.get("type") != ACCESS_TOKEN_TYPE:
        raise JWTError("Expected an access token")
    return claims
