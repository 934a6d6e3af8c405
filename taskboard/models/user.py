"""
User model — PIN login & role-based access control.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from taskboard.db.base import Base

ROLE_ADMIN = "admin"
ROLE_EMPLOYEE = "employee"

# Upper bound of the 32-bit INTEGER primary keys on PostgreSQL.
MAX_ID = 2**31 - 1
NAME_MAX_LENGTH = 255


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    name: str = Column(String(NAME_MAX_LENGTH), nullable=False)  # type: ignore[assignment]
    # Sole login credential; uniqueness is enforced here, not in the service.
    pin: str = Column(String(4), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    role: str = Column(  # type: ignore[assignment]
        String(20),
        nullable=False,
        default=ROLE_EMPLOYEE,
        server_default=ROLE_EMPLOYEE,
    )  # admin | employee
    is_active: bool = Column(Boolean, nullable=False, default=True, server_default="true")  # type: ignore[assignment]
    created_at: datetime = Column(DateTime(timezone=True), nullable=False, default=utcnow)  # type: ignore[assignment]
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
