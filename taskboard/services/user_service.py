"""
Employee directory — listing and onboarding employees (admin only).
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.exceptions import DuplicatePin, InvalidInput
from taskboard.models.user import NAME_MAX_LENGTH, ROLE_ADMIN, ROLE_EMPLOYEE, User
from taskboard.schemas.session import SessionData
from taskboard.services.auth_service import PIN_LENGTH, ensure_role

logger = logging.getLogger(__name__)


def _is_valid_pin(pin: object) -> bool:
    return (
        isinstance(pin, str)
        and len(pin) == PIN_LENGTH
        and pin.isascii()
        and pin.isdigit()
    )


async def list_employees(db: AsyncSession, session: SessionData) -> list[User]:
    """Active employees, alphabetical. Admins are never listed."""
    ensure_role(session, ROLE_ADMIN)
    result = await db.execute(
        select(User)
        .where(User.role == ROLE_EMPLOYEE, User.is_active.is_(True))
        .order_by(User.name, User.id)
    )
    return list(result.scalars().all())


async def create_employee(
    db: AsyncSession,
    session: SessionData,
    name: str | None,
    pin: str | None,
) -> User:
    ensure_role(session, ROLE_ADMIN)

    name = name.strip() if isinstance(name, str) else ""
    if not name or not _is_valid_pin(pin):
        raise InvalidInput("Name and 4-digit PIN are required")
    if len(name) > NAME_MAX_LENGTH:
        raise InvalidInput(f"Name must be at most {NAME_MAX_LENGTH} characters")

    existing = await db.execute(select(User.id).where(User.pin == pin).limit(1))
    if existing.scalar_one_or_none() is not None:
        raise DuplicatePin("PIN already in use")

    employee = User(name=name, pin=pin, role=ROLE_EMPLOYEE, is_active=True)
    db.add(employee)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent insert of the same PIN.
        await db.rollback()
        raise DuplicatePin("PIN already in use") from None
    await db.refresh(employee)

    logger.info("Created employee %d (%s)", employee.id, employee.name)
    return employee
