"""
Auth endpoints — PIN login, logout and session lookup.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.v1.deps import clear_session, get_db, get_session, write_session
from taskboard.core.exceptions import Unauthenticated
from taskboard.schemas.session import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    MeResponse,
    SessionData,
    SessionUser,
)
from taskboard.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_user(session: SessionData) -> SessionUser:
    return SessionUser(id=session.user_id, name=session.user_name, role=session.role)


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """Exchange a 4-digit PIN for an HttpOnly session cookie."""
    session = await auth_service.login(db, body.pin)
    write_session(response, session)
    return LoginResponse(success=True, user=_session_user(session))


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response) -> LogoutResponse:
    """Drop the session cookie. Succeeds whether or not anyone was logged in."""
    auth_service.logout()
    clear_session(response)
    return LogoutResponse(success=True)


@router.get("/me", response_model=MeResponse)
async def read_current_session(
    session: SessionData = Depends(get_session),
) -> MeResponse | JSONResponse:
    """Who is logged in. Anonymous callers get 401 with ``{"isLoggedIn": false}``."""
    try:
        session = auth_service.current_session(session)
    except Unauthenticated:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"isLoggedIn": False},
        )
    return MeResponse(is_logged_in=True, user=_session_user(session))
