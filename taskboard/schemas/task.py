"""Pydantic schemas for tasks and their per-type payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PALLET_BUILDER = "pallet_builder"


# ── Payload variants (keyed by task_type) ───────────────────────────
class PalletBuilderData(BaseModel):
    job_number: str = Field(min_length=1)
    pallet_number: str = Field(min_length=1)
    pallet_width: str = Field(min_length=1)
    pallet_length: str = Field(min_length=1)
    material: str = Field(min_length=1)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid",
    )


TASK_PAYLOADS: dict[str, type[BaseModel]] = {
    PALLET_BUILDER: PalletBuilderData,
}


# ── Requests ────────────────────────────────────────────────────────
class TaskCreate(BaseModel):
    task_type: str | None = None
    assigned_to: int | None = None
    task_data: dict[str, Any] | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Responses ───────────────────────────────────────────────────────
class TaskRead(BaseModel):
    id: int
    task_type: str
    task_data: dict[str, Any]
    assigned_to: int
    created_by: int
    is_completed: bool
    completed_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TaskListItem(BaseModel):
    id: int
    task_type: str
    task_data: dict[str, Any]
    assigned_to: int
    assigned_to_name: str | None
    is_completed: bool
    completed_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TaskListResponse(BaseModel):
    tasks: list[TaskListItem]


class TaskResponse(BaseModel):
    task: TaskRead
