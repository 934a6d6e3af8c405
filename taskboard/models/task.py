"""
Task model — work orders assigned by an admin to an employee.

A task is written once at creation and afterwards only moves from
pending to completed.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB

from taskboard.db.base import Base
from taskboard.models.user import utcnow


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (Index("ix_tasks_assignee_completed", "assigned_to", "is_completed"),)

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    task_type: str = Column(String(50), nullable=False)  # type: ignore[assignment]
    assigned_to: int = Column(Integer, ForeignKey("users.id"), nullable=False)  # type: ignore[assignment]
    created_by: int = Column(Integer, ForeignKey("users.id"), nullable=False)  # type: ignore[assignment]
    task_data: dict = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)  # type: ignore[assignment]
    is_completed: bool = Column(Boolean, nullable=False, default=False, server_default="false")  # type: ignore[assignment]
    completed_at: datetime | None = Column(DateTime(timezone=True), nullable=True)  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
