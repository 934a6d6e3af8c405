"""
Task endpoints.

- GET /tasks and POST /tasks/{id}/complete accept any logged-in user;
  the service narrows employees to their own tasks.
- POST /tasks requires admin role.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.v1.deps import get_db, require_admin, require_login
from taskboard.schemas.session import SessionData
from taskboard.schemas.task import TaskCreate, TaskListResponse, TaskRead, TaskResponse
from taskboard.services import task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    show_completed: str | None = Query(default=None, alias="showCompleted"),
    db: AsyncSession = Depends(get_db),
    session: SessionData = Depends(require_login),
) -> TaskListResponse:
    # Only the literal "true" includes completed tasks.
    tasks = await task_service.list_tasks(
        db, session, include_completed=show_completed == "true"
    )
    return TaskListResponse(tasks=tasks)


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    body: TaskCreate,
    db: AsyncSession = Depends(get_db),
    session: SessionData = Depends(require_admin),
) -> TaskResponse:
    task = await task_service.create_task(
        db, session, body.task_type, body.assigned_to, body.task_data
    )
    return TaskResponse(task=TaskRead.model_validate(task))


@router.post("/{task_id}/complete", response_model=TaskResponse)
async def complete_task(
    task_id: str,
    db: AsyncSession = Depends(get_db),
    session: SessionData = Depends(require_login),
) -> TaskResponse:
    task = await task_service.complete_task(db, session, task_id)
    return TaskResponse(task=TaskRead.model_validate(task))
