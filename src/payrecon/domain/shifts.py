"""Worked shift value types. Derived on every read, never persisted."""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime, timezone


@dataclass(frozen=True)
class ShiftFlags:
    is_incomplete: bool = False
    is_auto_clock_out: bool = False
    is_suspicious: bool = False


@dataclass(frozen=True)
class ShiftSource:
    in_id: int
    out_id: int | None = None


@dataclass(frozen=True)
class WorkedShift:
    employee_id: int
    date: date
    clock_in_time: datetime
    clock_out_time: datetime | None
    hours_worked: float
    source: ShiftSource
    flags: ShiftFlags = field(default_factory=ShiftFlags)
    # Needed by the auto-clockout detector; not part of the public shape.
    out_manually_edited: bool = False

    @property
    def is_complete(self) -> bool:
        return self.clock_out_time is not None


def as_utc(ts: datetime) -> datetime:
    """Storage returns naive datetimes for UTC columns on some backends."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)
