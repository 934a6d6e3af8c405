"""
FastAPI dependencies — session cookie adapter, role guard and database session.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Awaitable, Callable

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.config import settings
from taskboard.core.security import seal_session, unseal_session
from taskboard.db.session import async_session_factory
from taskboard.schemas.session import SessionData
from taskboard.services.auth_service import ensure_role


# ── Database session ────────────────────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# ── Session cookie ──────────────────────────────────────────────────
async def get_session(request: Request) -> SessionData:
    """Decode the session cookie; missing or bad cookies yield the logged-out shape."""
    return unseal_session(request.cookies.get(settings.SESSION_COOKIE_NAME))


def write_session(response: Response, session: SessionData) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=seal_session(session),
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        path="/",
    )


def clear_session(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        path="/",
    )


# ── Role guard ──────────────────────────────────────────────────────
def require_role(*roles: str) -> Callable[..., Awaitable[SessionData]]:
    """Build a dependency that admits logged-in callers holding one of *roles*.

    With no roles any logged-in caller passes.
    """

    async def _guard(session: SessionData = Depends(get_session)) -> SessionData:
        return ensure_role(session, *roles)

    return _guard


require_login = require_role()
require_admin = require_role("admin")
