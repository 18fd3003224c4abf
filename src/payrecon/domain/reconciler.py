"""Pair raw clock events into worked shifts.

A single open clock-in cursor is kept while scanning events in timestamp order:

* ``in`` while a clock-in is already open: the open one is emitted as an
  incomplete 0h shift (a forgotten clock-out is never dropped), then the cursor
  moves to the new event.
* ``out`` with an open clock-in: a completed shift is emitted and the cursor
  cleared. An ``out`` with nothing open is ignored.
* End of stream with an open clock-in: emitted as incomplete.
"""
from __future__ import annotations
from collections import defaultdict
from datetime import datetime
from typing import Iterable, Protocol
from zoneinfo import ZoneInfo

from payrecon.domain.enums import ClockEventType
from payrecon.domain.shifts import ShiftFlags, ShiftSource, WorkedShift, as_utc

_SECONDS_PER_HOUR = 3600.0


class ClockEventLike(Protocol):
    id: int
    employee_id: int
    event_type: ClockEventType
    event_timestamp: datetime
    manually_edited: bool


def _incomplete(event: ClockEventLike, tz: ZoneInfo) -> WorkedShift:
    in_time = as_utc(event.event_timestamp)
    return WorkedShift(
        employee_id=event.employee_id,
        date=in_time.astimezone(tz).date(),
        clock_in_time=in_time,
        clock_out_time=None,
        hours_worked=0.0,
        source=ShiftSource(in_id=event.id),
        flags=ShiftFlags(is_incomplete=True),
    )


def _completed(clock_in: ClockEventLike, clock_out: ClockEventLike, tz: ZoneInfo) -> WorkedShift:
    in_time = as_utc(clock_in.event_timestamp)
    out_time = as_utc(clock_out.event_timestamp)
    hours = (out_time - in_time).total_seconds() / _SECONDS_PER_HOUR
    return WorkedShift(
        employee_id=clock_in.employee_id,
        date=in_time.astimezone(tz).date(),
        clock_in_time=in_time,
        clock_out_time=out_time,
        hours_worked=max(hours, 0.0),
        source=ShiftSource(in_id=clock_in.id, out_id=clock_out.id),
        out_manually_edited=bool(clock_out.manually_edited),
    )


def _ordered(events: Iterable[ClockEventLike]) -> list[ClockEventLike]:
    return sorted(events, key=lambda e: (as_utc(e.event_timestamp), e.id))


def reconcile_events(events: Iterable[ClockEventLike], tz: ZoneInfo) -> list[WorkedShift]:
    """Reconcile one employee's events into shifts, in clock-in order."""
    shifts: list[WorkedShift] = []
    open_in: ClockEventLike | None = None

    for event in _ordered(events):
        kind = ClockEventType(event.event_type)
        if kind is ClockEventType.IN:
            if open_in is not None:
                shifts.append(_incomplete(open_in, tz))
            open_in = event
        elif kind is ClockEventType.OUT:
            if open_in is None:
                continue
            shifts.append(_completed(open_in, event, tz))
            open_in = None

    if open_in is not None:
        shifts.append(_incomplete(open_in, tz))
    return shifts


def reconcile_by_employee(
    events: Iterable[ClockEventLike], tz: ZoneInfo,
) -> dict[int, list[WorkedShift]]:
    grouped: dict[int, list[ClockEventLike]] = defaultdict(list)
    for event in events:
        grouped[event.employee_id].append(event)
    return {emp_id: reconcile_events(evts, tz) for emp_id, evts in grouped.items()}


def total_hours(shifts: Iterable[WorkedShift]) -> float:
    """Sum of completed shift hours; incomplete shifts contribute 0."""
    return sum(s.hours_worked for s in shifts if s.is_complete)


def has_incomplete(shifts: Iterable[WorkedShift]) -> bool:
    return any(s.flags.is_incomplete for s in shifts)
