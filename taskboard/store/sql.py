"""
SQLAlchemy implementation of the row store.

Translates predicate values into select/delete statements on an AsyncSession.
Writes are flushed, not committed: the request's session owns the transaction.
"""

from __future__ import annotations

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Column, and_, delete, func, select, true
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from taskboard.store.base import ModelT, RowPage
from taskboard.store.predicates import (
    FILTER_TYPES,
    Contains,
    Equals,
    Limit,
    Offset,
    OrderBy,
    Predicate,
    Search,
)


def _column(model: type[ModelT], name: str) -> Column[Any]:
    try:
        return model.__mapper__.columns[name]
    except KeyError:
        raise ValueError(f"{model.__name__} has no column {name!r}") from None


def _filter_clause(model: type[ModelT], predicate: Predicate) -> ColumnElement[bool]:
    column = _column(model, predicate.field)
    if isinstance(predicate, Equals):
        return column == predicate.value
    if isinstance(predicate, Contains):
        return column.in_(predicate.values)
    if isinstance(predicate, Search):
        tokens = predicate.tokens
        if not tokens:
            return true()
        return and_(*(column.icontains(token, autoescape=True) for token in tokens))
    raise TypeError(f"Not a filter predicate: {predicate!r}")


class SqlRowStore:
    """Row store backed by the request's AsyncSession."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_row(self, model: type[ModelT], row_id: UUID) -> ModelT | None:
        return await self.db.get(model, row_id)

    async def list_rows(
        self, model: type[ModelT], predicates: Sequence[Predicate] = ()
    ) -> RowPage[ModelT]:
        stmt = select(model)
        paged = False

        for predicate in predicates:
            if isinstance(predicate, FILTER_TYPES):
                stmt = stmt.where(_filter_clause(model, predicate))

        filtered = stmt

        for predicate in predicates:
            if isinstance(predicate, OrderBy):
                column = _column(model, predicate.field)
                stmt = stmt.order_by(column.desc() if predicate.descending else column.asc())
            elif isinstance(predicate, Limit):
                stmt = stmt.limit(predicate.count)
                paged = True
            elif isinstance(predicate, Offset):
                stmt = stmt.offset(predicate.count)
                paged = True

        result = await self.db.execute(stmt)
        rows = list(result.scalars().all())

        if paged:
            count_stmt = select(func.count()).select_from(filtered.subquery())
            total = (await self.db.execute(count_stmt)).scalar_one()
        else:
            total = len(rows)

        return RowPage(rows=rows, total=total)

    async def create_row(self, model: type[ModelT], data: dict[str, Any]) -> ModelT:
        for key in data:
            _column(model, key)
        row = model(**data)
        self.db.add(row)
        await self.db.flush()
        return row

    async def update_row(
        self, model: type[ModelT], row_id: UUID, data: dict[str, Any]
    ) -> ModelT | None:
        row = await self.db.get(model, row_id)
        if row is None:
            return None
        for key, value in data.items():
            _column(model, key)
            setattr(row, key, value)
        await self.db.flush()
        return row

    async def delete_row(self, model: type[ModelT], row_id: UUID) -> bool:
        row = await self.db.get(model, row_id)
        if row is None:
            return False
        await self.db.delete(row)
        await self.db.flush()
        return True

    async def delete_rows(
        self, model: type[ModelT], predicates: Sequence[Predicate]
    ) -> int:
        clauses = [
            _filter_clause(model, predicate)
            for predicate in predicates
            if isinstance(predicate, FILTER_TYPES)
        ]
        if not clauses:
            raise ValueError("delete_rows requires at least one filter predicate")
        result = await self.db.execute(delete(model).where(*clauses))
        await self.db.flush()
        return result.rowcount
