"""
Task list query composition tests.
"""

import uuid
from datetime import date

import pytest
from pydantic import ValidationError

from taskboard.models.task import TaskStatus
from taskboard.schemas.task import TaskFilters
from taskboard.services.task_query import build_task_query
from taskboard.store.predicates import Equals, Limit, Offset, OrderBy, Search

WORKSPACE_ID = uuid.uuid4()


def test_minimal_query_is_scoped_and_newest_first():
    query = build_task_query(TaskFilters(workspace_id=WORKSPACE_ID))

    assert query == [
        Equals("workspace_id", WORKSPACE_ID),
        OrderBy("created_at", descending=True),
        Limit(25),
    ]


def test_every_filter_contributes_one_predicate():
    project_id = uuid.uuid4()
    assignee_id = uuid.uuid4()
    filters = TaskFilters(
        workspace_id=WORKSPACE_ID,
        project_id=project_id,
        assignee_id=assignee_id,
        status=TaskStatus.IN_REVIEW,
        due_date=date(2026, 3, 1),
        search="fix login",
        skip=50,
        limit=10,
    )

    query = build_task_query(filters)

    assert Equals("project_id", project_id) in query
    assert Equals("assignee_id", assignee_id) in query
    assert Equals("status", TaskStatus.IN_REVIEW) in query
    assert Equals("due_date", date(2026, 3, 1)) in query
    assert Search("name", "fix login") in query
    assert Offset(50) in query
    assert query[-1] == Limit(10)
    assert len(query) == 9


@pytest.mark.parametrize("search", ["", "   ", None])
def test_blank_search_is_dropped(search):
    query = build_task_query(TaskFilters(workspace_id=WORKSPACE_ID, search=search))
    assert not any(isinstance(p, Search) for p in query)


def test_search_text_is_trimmed():
    query = build_task_query(TaskFilters(workspace_id=WORKSPACE_ID, search="  deploy  "))
    assert Search("name", "deploy") in query


def test_same_filters_give_same_query():
    filters = TaskFilters(workspace_id=WORKSPACE_ID, status=TaskStatus.DONE, search="x")
    assert build_task_query(filters) == build_task_query(filters)


def test_filters_are_immutable():
    filters = TaskFilters(workspace_id=WORKSPACE_ID)
    with pytest.raises(ValidationError):
        filters.status = TaskStatus.DONE


@pytest.mark.parametrize("limit", [0, 101])
def test_limit_out_of_range_is_rejected(limit):
    with pytest.raises(ValidationError):
        TaskFilters(workspace_id=WORKSPACE_ID, limit=limit)
