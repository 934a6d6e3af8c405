"""
Task service — role-scoped visibility and the pending -> completed transition.

Visibility rules:

- admins see every task and may complete any of them;
- employees see, and may complete, only tasks assigned to them.  A task
  owned by someone else is reported exactly like a missing one.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.exceptions import InvalidInput, NotFound
from taskboard.models.task import Task
from taskboard.models.user import MAX_ID, ROLE_ADMIN, ROLE_EMPLOYEE, User
from taskboard.schemas.session import SessionData
from taskboard.schemas.task import TASK_PAYLOADS, TaskListItem
from taskboard.services.auth_service import ensure_role

logger = logging.getLogger(__name__)


# ── Helpers ─────────────────────────────────────────────────────────
def validate_task_data(task_type: str, task_data: dict[str, Any]) -> dict[str, Any]:
    """Check *task_data* against the payload model registered for *task_type*."""
    payload_model = TASK_PAYLOADS.get(task_type)
    if payload_model is None:
        raise InvalidInput(f"Unknown task type '{task_type}'")
    try:
        payload = payload_model.model_validate(task_data)
    except ValidationError:
        raise InvalidInput(f"Invalid task data for '{task_type}'") from None
    return payload.model_dump(by_alias=True)


def parse_task_id(raw: object) -> int:
    if isinstance(raw, bool):
        raise InvalidInput("Invalid task ID")
    if isinstance(raw, int):
        task_id = raw
    elif isinstance(raw, str) and raw.isascii() and raw.isdigit():
        task_id = int(raw)
    else:
        raise InvalidInput("Invalid task ID")
    if task_id <= 0 or task_id > MAX_ID:
        raise InvalidInput("Invalid task ID")
    return task_id


# ── Operations ──────────────────────────────────────────────────────
async def list_tasks(
    db: AsyncSession,
    session: SessionData,
    include_completed: bool = False,
) -> list[TaskListItem]:
    """Tasks visible to the caller, newest first; ties keep insertion order."""
    session = ensure_role(session)

    query = (
        select(Task, User.name)
        .outerjoin(User, Task.assigned_to == User.id)
        .order_by(Task.created_at.desc(), Task.id.asc())
    )
    if session.role != ROLE_ADMIN:
        query = query.where(Task.assigned_to == session.user_id)
    if not include_completed:
        query = query.where(Task.is_completed.is_(False))

    result = await db.execute(query)
    return [
        TaskListItem(
            id=task.id,
            task_type=task.task_type,
            task_data=task.task_data,
            assigned_to=task.assigned_to,
            assigned_to_name=assignee_name,
            is_completed=task.is_completed,
            completed_at=task.completed_at,
            created_at=task.created_at,
        )
        for task, assignee_name in result.all()
    ]


async def create_task(
    db: AsyncSession,
    session: SessionData,
    task_type: str | None,
    assigned_to: int | None,
    task_data: dict[str, Any] | None,
) -> Task:
    session = ensure_role(session, ROLE_ADMIN)

    if not task_type or not assigned_to or not task_data:
        raise InvalidInput("Missing required fields")

    if (
        isinstance(assigned_to, bool)
        or not isinstance(assigned_to, int)
        or not 0 < assigned_to <= MAX_ID
    ):
        raise InvalidInput("Task must be assigned to an active employee")

    payload = validate_task_data(task_type, task_data)

    assignee = await db.get(User, assigned_to)
    if assignee is None or assignee.role != ROLE_EMPLOYEE or not assignee.is_active:
        raise InvalidInput("Task must be assigned to an active employee")

    task = Task(
        task_type=task_type,
        assigned_to=assignee.id,
        created_by=session.user_id,
        task_data=payload,
        is_completed=False,
        completed_at=None,
    )
    db.add(task)
    await db.commit()
    await db.refresh(task)

    logger.info(
        "Task %d (%s) created by user %d for user %d",
        task.id,
        task.task_type,
        task.created_by,
        task.assigned_to,
    )
    return task


async def complete_task(db: AsyncSession, session: SessionData, raw_task_id: object) -> Task:
    """Mark a task completed.

    The update is unconditional: completing an already-completed task
    stamps ``completed_at`` again.
    """
    session = ensure_role(session)
    task_id = parse_task_id(raw_task_id)

    if session.role != ROLE_ADMIN:
        owned = await db.execute(
            select(Task.id).where(
                Task.id == task_id,
                Task.assigned_to == session.user_id,
            )
        )
        if owned.scalar_one_or_none() is None:
            raise NotFound("Task not found")

    now = datetime.now(timezone.utc)
    result = await db.execute(
        update(Task)
        .where(Task.id == task_id)
        .values(is_completed=True, completed_at=now, updated_at=now)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise NotFound("Task not found")
    await db.commit()

    task = await db.get(Task, task_id, populate_existing=True)
    if task is None:
        raise NotFound("Task not found")

    logger.info("Task %d completed by user %d", task_id, session.user_id)
    return task
