"""
Task list query composition.

Turns a TaskFilters value into row store predicates. Pure: no I/O, same input
always yields the same predicate list.
"""

from __future__ import annotations

from taskboard.schemas.task import TaskFilters
from taskboard.store.predicates import Equals, Limit, Offset, OrderBy, Predicate, Search


def build_task_query(filters: TaskFilters) -> list[Predicate]:
    """
    Compose the predicates for listing tasks.

    Workspace scope and newest-first ordering are always present. Each
    optional filter contributes one predicate only when it is set.
    """
    query: list[Predicate] = [
        Equals("workspace_id", filters.workspace_id),
        OrderBy("created_at", descending=True),
    ]

    if filters.project_id is not None:
        query.append(Equals("project_id", filters.project_id))
    if filters.assignee_id is not None:
        query.append(Equals("assignee_id", filters.assignee_id))
    if filters.status is not None:
        query.append(Equals("status", filters.status))
    if filters.due_date is not None:
        query.append(Equals("due_date", filters.due_date))
    if filters.search is not None and filters.search.strip():
        query.append(Search("name", filters.search.strip()))

    if filters.skip:
        query.append(Offset(filters.skip))
    query.append(Limit(filters.limit))

    return query
