"""Clock event, worked shift and correction DTOs: pure Pydantic, zero ORM imports."""
from __future__ import annotations
from datetime import date, datetime
from enum import Enum
from pydantic import AwareDatetime, BaseModel
from payrecon.domain.enums import ClockEventType


class ClockEventCreate(BaseModel):
    event_type: ClockEventType
    timestamp: AwareDatetime


class ClockEventUpdate(BaseModel):
    timestamp: AwareDatetime


class ClockEventRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    employee_id: int
    event_type: ClockEventType
    event_timestamp: datetime
    manually_edited: bool


class EventMutationResult(BaseModel):
    success: bool


class ShiftFlagsRead(BaseModel):
    is_incomplete: bool
    is_auto_clock_out: bool
    is_suspicious: bool


class WorkedShiftRead(BaseModel):
    employee_id: int
    date: date
    day_name: str
    clock_in_time: datetime
    clock_out_time: datetime | None = None
    clock_in: str
    clock_out: str | None = None
    hours_worked: float
    hours_display: str
    flags: ShiftFlagsRead
    clock_in_id: int
    clock_out_id: int | None = None


class ShiftList(BaseModel):
    start: date
    end: date
    items: list[WorkedShiftRead]
    total_hours: float
    has_incomplete_shifts: bool


class CorrectionRequest(BaseModel):
    """Edit one shift. An id means update that row; no id with a time means create."""
    clock_in_id: int | None = None
    clock_in_time: AwareDatetime | None = None
    clock_out_id: int | None = None
    clock_out_time: AwareDatetime | None = None


class CorrectionAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"


class CorrectionStep(BaseModel):
    event_type: ClockEventType
    action: CorrectionAction
    event_id: int | None = None
    success: bool


class CorrectionResult(BaseModel):
    success: bool
    steps: list[CorrectionStep]
