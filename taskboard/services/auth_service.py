"""
Authentication service — PIN lookup and session identity.

Nothing here touches cookies; callers hand in and get back plain
:class:`SessionData` objects.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.exceptions import (
    AccountInactive,
    InvalidCredentials,
    InvalidInput,
    Unauthenticated,
    Unauthorized,
)
from taskboard.models.user import User
from taskboard.schemas.session import SessionData

logger = logging.getLogger(__name__)

PIN_LENGTH = 4


async def login(db: AsyncSession, pin: object) -> SessionData:
    """Resolve *pin* to an active user and return a logged-in session.

    Unknown PINs fail with the same opaque error regardless of whether
    the directory is empty or not.
    """
    if not isinstance(pin, str) or len(pin) != PIN_LENGTH:
        raise InvalidInput("Invalid PIN format")

    result = await db.execute(select(User).where(User.pin == pin).limit(1))
    user = result.scalar_one_or_none()

    if user is None:
        logger.warning("Login rejected: unknown PIN")
        raise InvalidCredentials("Invalid PIN")
    if not user.is_active:
        logger.warning("Login rejected: user %d is inactive", user.id)
        raise AccountInactive("Account is inactive")

    logger.info("User %d (%s) logged in", user.id, user.role)
    return SessionData(
        user_id=user.id,
        user_name=user.name,
        role=user.role,
        is_logged_in=True,
    )


def logout() -> SessionData:
    """Return the logged-out session shape. Safe to call repeatedly."""
    return SessionData()


def current_session(session: SessionData | None) -> SessionData:
    if session is None or not session.is_logged_in or session.user_id is None:
        raise Unauthenticated("Not logged in")
    return session


def ensure_role(session: SessionData | None, *roles: str) -> SessionData:
    """Authenticate *session* and, when *roles* is given, require one of them.

    A logged-in caller with the wrong role gets ``Unauthorized`` (401).
    """
    session = current_session(session)
    if roles and session.role not in roles:
        raise Unauthorized("Unauthorized")
    return session
