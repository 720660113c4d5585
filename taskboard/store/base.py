"""
Row store interface.

Services talk to persistence only through this protocol: fetch by id, list by
predicates, create, update and delete.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, Sequence, TypeVar
from uuid import UUID

from taskboard.models.base import Base
from taskboard.store.predicates import Predicate

ModelT = TypeVar("ModelT", bound=Base)


@dataclass
class RowPage(Generic[ModelT]):
    """One page of rows plus the count of all rows matching the filters."""

    rows: list[ModelT] = field(default_factory=list)
    total: int = 0


class RowStore(Protocol):

    async def get_row(self, model: type[ModelT], row_id: UUID) -> ModelT | None: ...

    async def list_rows(
        self, model: type[ModelT], predicates: Sequence[Predicate] = ()
    ) -> RowPage[ModelT]: ...

    async def create_row(self, model: type[ModelT], data: dict[str, Any]) -> ModelT: ...

    async def update_row(
        self, model: type[ModelT], row_id: UUID, data: dict[str, Any]
    ) -> ModelT | None: ...

    async def delete_row(self, model: type[ModelT], row_id: UUID) -> bool: ...

    async def delete_rows(
        self, model: type[ModelT], predicates: Sequence[Predicate]
    ) -> int: ...
