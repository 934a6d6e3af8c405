"""
Employee directory endpoints (admin only).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.v1.deps import get_db, require_admin
from taskboard.schemas.session import SessionData
from taskboard.schemas.user import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeRead,
    EmployeeResponse,
)
from taskboard.services import user_service

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    db: AsyncSession = Depends(get_db),
    session: SessionData = Depends(require_admin),
) -> EmployeeListResponse:
    employees = await user_service.list_employees(db, session)
    return EmployeeListResponse(
        employees=[EmployeeRead.model_validate(e) for e in employees]
    )


@router.post("", response_model=EmployeeResponse, status_code=201)
async def create_employee(
    body: EmployeeCreate,
    db: AsyncSession = Depends(get_db),
    session: SessionData = Depends(require_admin),
) -> EmployeeResponse:
    """Onboard a new employee with a unique 4-digit PIN."""
    employee = await user_service.create_employee(db, session, body.name, body.pin)
    return EmployeeResponse(employee=EmployeeRead.model_validate(employee))
