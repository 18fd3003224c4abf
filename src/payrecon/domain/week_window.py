"""Business-timezone week and pay-period windows.

Every window is a half-open range of calendar dates ``[start, end)`` where
``end`` is the Monday after the last Sunday covered, so ``< end`` filters keep
the whole Sunday.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from payrecon.domain.enums import PeriodSelection


@dataclass(frozen=True)
class WeekWindow:
    selection: PeriodSelection
    start: date
    end: date

    @property
    def display_end(self) -> date:
        """Last day actually covered (the Sunday)."""
        return self.end - timedelta(days=1)

    @property
    def days(self) -> int:
        return (self.end - self.start).days

    def overlaps(self, start: date, end: date) -> bool:
        """Whether the half-open period ``[start, end)`` shares a day with this window."""
        return start < self.end and end > self.start

    def start_instant(self, tz: ZoneInfo) -> datetime:
        return datetime.combine(self.start, datetime.min.time(), tzinfo=tz)

    def end_instant(self, tz: ZoneInfo) -> datetime:
        return datetime.combine(self.end, datetime.min.time(), tzinfo=tz)


def business_now(tz: ZoneInfo, now: datetime | None = None) -> datetime:
    """Return ``now`` (default: the real clock) expressed in the business timezone."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        raise ValueError("now must be timezone-aware")
    return now.astimezone(tz)


def monday_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


def compute_week_window(selection: PeriodSelection | str, now: datetime, tz: ZoneInfo) -> WeekWindow:
    """Window for ``selection`` relative to the business-local date of ``now``.

    ``this``/``last`` cover one Monday-Sunday week; ``lastPayPeriod`` covers the
    two most recently completed weeks.
    """
    selection = PeriodSelection(selection)
    today = business_now(tz, now).date()
    this_monday = monday_of(today)

    if selection is PeriodSelection.THIS:
        start = this_monday
        end = this_monday + timedelta(days=7)
    elif selection is PeriodSelection.LAST:
        start = this_monday - timedelta(days=7)
        end = this_monday
    elif selection is PeriodSelection.LAST_PAY_PERIOD:
        start = this_monday - timedelta(days=14)
        end = this_monday
    else:  # pragma: no cover
        raise ValueError(f"Unknown period selection: {selection!r}")

    return WeekWindow(selection=selection, start=start, end=end)
