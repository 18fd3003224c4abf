"""Employee DTOs: pure Pydantic, zero ORM imports."""
from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel, field_validator


class EmployeeCreate(BaseModel):
    first_name: str
    last_name: str | None = None
    role: str = "Staff"

    @field_validator("first_name")
    @classmethod
    def first_name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("first_name must not be empty")
        return v.strip()


class EmployeeRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    first_name: str
    last_name: str | None = None
    display_name: str
    role: str
    active: bool
    created_at: datetime | None = None


class EmployeeList(BaseModel):
    items: list[EmployeeRead]
    total: int
