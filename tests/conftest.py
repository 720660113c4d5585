"""
Pytest configuration for Taskboard backend tests.

Runs every test against a fresh in-memory SQLite database through aiosqlite.
"""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import uuid
from datetime import UTC, date, datetime, timedelta
from typing import Any, Sequence

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from taskboard.core.dependencies import RequestContext
from taskboard.models import Base, Member, MemberRole, Project, Task, TaskStatus, User, Workspace
from taskboard.services.identity_service import SqlIdentityService, UserIdentity
from taskboard.store.predicates import Predicate
from taskboard.store.sql import SqlRowStore

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Counting wrappers
# ---------------------------------------------------------------------------

class CountingStore:
    """Wraps a row store and records every call as (method, model name)."""

    def __init__(self, inner: SqlRowStore) -> None:
        self.inner = inner
        self.calls: list[tuple[str, str]] = []

    def count(self, method: str, model: type | None = None) -> int:
        return sum(
            1 for m, name in self.calls
            if m == method and (model is None or name == model.__name__)
        )

    async def get_row(self, model, row_id):
        self.calls.append(("get_row", model.__name__))
        return await self.inner.get_row(model, row_id)

    async def list_rows(self, model, predicates: Sequence[Predicate] = ()):
        self.calls.append(("list_rows", model.__name__))
        return await self.inner.list_rows(model, predicates)

    async def create_row(self, model, data: dict[str, Any]):
        self.calls.append(("create_row", model.__name__))
        return await self.inner.create_row(model, data)

    async def update_row(self, model, row_id, data: dict[str, Any]):
        self.calls.append(("update_row", model.__name__))
        return await self.inner.update_row(model, row_id, data)

    async def delete_row(self, model, row_id):
        self.calls.append(("delete_row", model.__name__))
        return await self.inner.delete_row(model, row_id)

    async def delete_rows(self, model, predicates: Sequence[Predicate]):
        self.calls.append(("delete_rows", model.__name__))
        return await self.inner.delete_rows(model, predicates)


class CountingIdentity:
    """Wraps an identity service and records each looked-up user id."""

    def __init__(self, inner: SqlIdentityService) -> None:
        self.inner = inner
        self.lookups: list[uuid.UUID] = []

    async def get_user(self, user_id: uuid.UUID) -> UserIdentity | None:
        self.lookups.append(user_id)
        return await self.inner.get_user(user_id)


@pytest.fixture
def counting_store(db):
    return CountingStore(SqlRowStore(db))


@pytest.fixture
def counting_identity(db):
    return CountingIdentity(SqlIdentityService(db))


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def unique_email(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}@example.com"


async def make_user(db: AsyncSession, name: str = "Test User", is_active: bool = True) -> User:
    user = User(email=unique_email(name.lower().replace(" ", "_")), display_name=name, is_active=is_active)
    db.add(user)
    await db.flush()
    return user


async def make_workspace(db: AsyncSession, owner: User, name: str = "Workspace") -> Workspace:
    workspace = Workspace(name=name, user_id=owner.id, invite_code="abc123")
    db.add(workspace)
    await db.flush()
    return workspace


async def make_member(
    db: AsyncSession,
    workspace: Workspace,
    user: User,
    role: MemberRole = MemberRole.MEMBER,
) -> Member:
    member = Member(workspace_id=workspace.id, user_id=user.id, role=role)
    db.add(member)
    await db.flush()
    return member


async def make_project(db: AsyncSession, workspace: Workspace, name: str = "Project") -> Project:
    project = Project(workspace_id=workspace.id, name=name)
    db.add(project)
    await db.flush()
    return project


_BASE_TIME = datetime(2026, 1, 1, tzinfo=UTC)


async def make_task(
    db: AsyncSession,
    workspace: Workspace,
    project: Project,
    assignee: Member,
    name: str = "Task",
    status: TaskStatus = TaskStatus.TODO,
    position: int = 1000,
    created_offset: int = 0,
    due_date: date = date(2026, 6, 1),
) -> Task:
    """Insert a task directly. created_offset (seconds) fixes list ordering."""
    created_at = _BASE_TIME + timedelta(seconds=created_offset)
    task = Task(
        workspace_id=workspace.id,
        project_id=project.id,
        assignee_id=assignee.id,
        name=name,
        description="",
        due_date=due_date,
        status=status,
        position=position,
        created_at=created_at,
        updated_at=created_at,
    )
    db.add(task)
    await db.flush()
    return task


def context_for(db: AsyncSession, user: User) -> RequestContext:
    return RequestContext(user=user, store=SqlRowStore(db), identity=SqlIdentityService(db))


# ---------------------------------------------------------------------------
# Board fixture
# ---------------------------------------------------------------------------

class Board:
    """One workspace with an Admin (alice), a Member (bob), a project and an outsider."""

    alice: User
    bob: User
    outsider: User
    workspace: Workspace
    admin: Member
    member: Member
    project: Project


@pytest_asyncio.fixture
async def board(db) -> Board:
    b = Board()
    b.alice = await make_user(db, "Alice")
    b.bob = await make_user(db, "Bob")
    b.outsider = await make_user(db, "Mallory")
    b.workspace = await make_workspace(db, b.alice)
    b.admin = await make_member(db, b.workspace, b.alice, MemberRole.ADMIN)
    b.member = await make_member(db, b.workspace, b.bob, MemberRole.MEMBER)
    b.project = await make_project(db, b.workspace, "P1")
    return b
