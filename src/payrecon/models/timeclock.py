from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index
from sqlmodel import Field, SQLModel

from payrecon.domain.enums import ClockEventType
from payrecon.models.core import utcnow


class ClockEvent(SQLModel, table=True):
    """Raw clock-in/out row, owned by the time clock. Stored in UTC."""

    __table_args__ = (
        Index("ix_clockevent_employee_ts", "employee_id", "event_timestamp"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    employee_id: int = Field(foreign_key="employee.id")
    event_type: ClockEventType
    event_timestamp: datetime = Field(sa_type=DateTime(timezone=True))
    manually_edited: bool = False
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
