"""
SQLAlchemy ORM models.

All models imported here to ensure they are registered with Base.metadata.
Import order matters: base models before dependent models.
"""

from taskboard.models.base import Base, TimestampMixin, UUIDMixin
from taskboard.models.user import User
from taskboard.models.workspace import Workspace
from taskboard.models.member import Member, MemberRole
from taskboard.models.project import Project
from taskboard.models.task import Task, TaskStatus

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "User",
    "Workspace",
    "Member",
    "MemberRole",
    "Project",
    "Task",
    "TaskStatus",
]
