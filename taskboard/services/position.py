"""
Board position allocation.

Tasks in a (workspace, status) bucket are ordered by an integer position.
New tasks go to the end of their bucket with a fixed gap, leaving room for
the board to place dragged tasks between neighbours without renumbering.
Positions are never compacted.
"""

from __future__ import annotations

import logging
from typing import Sequence
from uuid import UUID

from taskboard.core.errors import bad_request, not_found, unauthorized
from taskboard.models.task import Task, TaskStatus
from taskboard.schemas.task import TaskReorderItem
from taskboard.services.membership import require_membership
from taskboard.store.base import RowStore
from taskboard.store.predicates import Contains, Equals, Limit, OrderBy

logger = logging.getLogger(__name__)

POSITION_STEP = 1000


class PositionAllocator:

    def __init__(self, store: RowStore) -> None:
        self.store = store

    async def allocate(self, workspace_id: UUID, status: TaskStatus) -> int:
        """Return max position in the bucket + POSITION_STEP, or POSITION_STEP if empty."""
        page = await self.store.list_rows(
            Task,
            [
                Equals("workspace_id", workspace_id),
                Equals("status", status),
                OrderBy("position", descending=True),
                Limit(1),
            ],
        )
        if not page.rows:
            return POSITION_STEP
        return page.rows[0].position + POSITION_STEP

    async def reorder(
        self, user_id: UUID, items: Sequence[TaskReorderItem]
    ) -> list[Task]:
        """
        Apply caller-computed statuses and positions to a batch of tasks.

        Every task must live in the same workspace and the caller must be a
        member of it. Nothing is written unless both hold. Rows are written
        through the request's session, so a failure part-way rolls back with
        the transaction.
        """
        ids = tuple(item.id for item in items)
        page = await self.store.list_rows(Task, [Contains("id", ids)])

        workspace_ids = {t.workspace_id for t in page.rows}
        if len(workspace_ids) > 1:
            logger.warning(
                "Rejected reorder spanning %d workspaces (user_id=%s)",
                len(workspace_ids), user_id,
            )
            raise bad_request(
                "CROSS_WORKSPACE_REORDER",
                "All tasks must belong to the same workspace",
            )
        if not workspace_ids:
            # Nothing resolved, so there is no workspace to authorize against
            raise unauthorized()

        workspace_id = workspace_ids.pop()
        await require_membership(self.store, workspace_id, user_id)

        found = {t.id: t for t in page.rows}
        missing = [str(i) for i in ids if i not in found]
        if missing:
            raise not_found("TASK_NOT_FOUND", f"Tasks not found: {', '.join(missing)}")

        updated: list[Task] = []
        for item in items:
            task = await self.store.update_row(
                Task, item.id, {"status": item.status, "position": item.position}
            )
            if task is None:
                raise not_found("TASK_NOT_FOUND", f"Task {item.id} not found")
            updated.append(task)

        logger.info(
            "Reordered %d tasks in workspace_id=%s (user_id=%s)",
            len(updated), workspace_id, user_id,
        )
        return updated
