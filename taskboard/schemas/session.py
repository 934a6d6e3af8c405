"""Pydantic schemas for the session cookie and auth responses."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Role = Literal["admin", "employee"]


class SessionData(BaseModel):
    """Identity carried in the session cookie.

    The default instance is the logged-out shape.
    """

    user_id: int | None = None
    user_name: str | None = None
    role: Role | None = None
    is_logged_in: bool = False

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(BaseModel):
    pin: str


class SessionUser(BaseModel):
    id: int
    name: str
    role: Role


class LoginResponse(BaseModel):
    success: bool = True
    user: SessionUser


class LogoutResponse(BaseModel):
    success: bool = True


class MeResponse(BaseModel):
    is_logged_in: bool
    user: SessionUser

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
