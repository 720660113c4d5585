"""
Query predicate language for the row store.

A query is an ordered sequence of predicate values. Filter predicates
(Equals, Contains, Search) are combined with AND; OrderBy entries apply in the
order given; Limit and Offset page the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any


@dataclass(frozen=True)
class Contains:
    """Field value is one of `values`."""

    field: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class Search:
    """Every whitespace-separated token of `text` occurs in the field, ignoring case."""

    field: str
    text: str

    @property
    def tokens(self) -> list[str]:
        return self.text.split()


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = False


@dataclass(frozen=True)
class Limit:
    count: int


@dataclass(frozen=True)
class Offset:
    count: int


Predicate = Equals | Contains | Search | OrderBy | Limit | Offset

FILTER_TYPES = (Equals, Contains, Search)
