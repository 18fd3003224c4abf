"""Human-readable strings for shifts and hours, always in business-local time."""
from __future__ import annotations
import math
from datetime import datetime
from zoneinfo import ZoneInfo


def format_clock_time(ts: datetime | None, tz: ZoneInfo) -> str | None:
    """``6:30 PM`` style, or None for a missing clock-out."""
    if ts is None:
        return None
    local = ts.astimezone(tz)
    hour = local.hour % 12 or 12
    return f"{hour}:{local.minute:02d} {'PM' if local.hour >= 12 else 'AM'}"


def format_day_name(ts: datetime, tz: ZoneInfo) -> str:
    return ts.astimezone(tz).strftime("%A")


def format_hours_minutes(hours: float) -> str:
    """8.5 -> ``8h 30m``; minutes are always rounded down."""
    whole = math.floor(hours)
    minutes = math.floor(round((hours - whole) * 60, 6))
    return f"{whole}h" if minutes == 0 else f"{whole}h {minutes}m"
