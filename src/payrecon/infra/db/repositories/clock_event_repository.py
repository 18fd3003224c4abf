"""Repository for raw clock events. No business logic; caller owns the transaction.

Timestamps are normalised to UTC on the way in; SQLite drops offsets on storage.
"""
from __future__ import annotations
from datetime import datetime
from sqlmodel import Session, select
from payrecon.domain.enums import ClockEventType
from payrecon.domain.shifts import as_utc
from payrecon.models.timeclock import ClockEvent


class ClockEventRepository:
    def __init__(self, session: Session) -> None:
        self._s = session

    def get_by_id(self, event_id: int) -> ClockEvent | None:
        return self._s.get(ClockEvent, event_id)

    def list_for_range(
        self, start: datetime, end: datetime, *, employee_id: int | None = None,
    ) -> list[ClockEvent]:
        """Events with ``start <= timestamp < end``, oldest first."""
        stmt = select(ClockEvent).where(
            ClockEvent.event_timestamp >= as_utc(start), ClockEvent.event_timestamp < as_utc(end),
        )
        if employee_id is not None:
            stmt = stmt.where(ClockEvent.employee_id == employee_id)
        stmt = stmt.order_by(ClockEvent.event_timestamp, ClockEvent.id)
        return list(self._s.exec(stmt).all())

    def create(
        self, *, employee_id: int, event_type: ClockEventType, timestamp: datetime,
        manually_edited: bool = False,
    ) -> ClockEvent:
        event = ClockEvent(
            employee_id=employee_id,
            event_type=event_type,
            event_timestamp=as_utc(timestamp),
            manually_edited=manually_edited,
        )
        self._s.add(event)
        self._s.flush()
        return event

    def update_timestamp(self, event: ClockEvent, timestamp: datetime) -> ClockEvent:
        event.event_timestamp = as_utc(timestamp)
        event.manually_edited = True
        self._s.add(event)
        self._s.flush()
        return event
