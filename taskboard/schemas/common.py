from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel


class IdResponse(BaseModel):
    """Returned by deletes and other operations that only confirm the target."""

    id: UUID
