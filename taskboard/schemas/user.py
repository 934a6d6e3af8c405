"""Pydantic schemas for the employee directory."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EmployeeCreate(BaseModel):
    # Left loose on purpose: the directory service owns the validation
    # so a missing name and a bad PIN produce the same 400.
    name: str | None = None
    pin: str | None = None


class EmployeeRead(BaseModel):
    id: int
    name: str
    is_active: bool

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class EmployeeListResponse(BaseModel):
    employees: list[EmployeeRead]


class EmployeeResponse(BaseModel):
    employee: EmployeeRead
