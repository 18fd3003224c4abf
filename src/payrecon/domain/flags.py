"""Anomaly flags on worked shifts."""
from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime, time
from typing import Iterable
from zoneinfo import ZoneInfo

from payrecon.domain.shifts import ShiftFlags, WorkedShift


@dataclass(frozen=True)
class FlagRules:
    tz: ZoneInfo
    auto_clockout_cutoff: time = time(18, 30)
    auto_clockout_tolerance_minutes: int = 0
    suspicious_hours: float = 5 / 60
    red_flag_max_hours: float = 13.0
    red_flag_min_hours: float = 0.5

    @classmethod
    def from_settings(cls, settings) -> "FlagRules":
        return cls(
            tz=settings.business_tz,
            auto_clockout_cutoff=settings.auto_clockout_cutoff,
            auto_clockout_tolerance_minutes=settings.AUTO_CLOCKOUT_TOLERANCE_MINUTES,
            suspicious_hours=settings.SUSPICIOUS_SHIFT_HOURS,
            red_flag_max_hours=settings.RED_FLAG_MAX_HOURS,
            red_flag_min_hours=settings.RED_FLAG_MIN_HOURS,
        )


def lands_on_cutoff(clock_out: datetime, rules: FlagRules) -> bool:
    local = clock_out.astimezone(rules.tz)
    minute_of_day = local.hour * 60 + local.minute
    cutoff = rules.auto_clockout_cutoff.hour * 60 + rules.auto_clockout_cutoff.minute
    return abs(minute_of_day - cutoff) <= rules.auto_clockout_tolerance_minutes


def is_auto_clock_out(shift: WorkedShift, rules: FlagRules) -> bool:
    if shift.clock_out_time is None or shift.out_manually_edited:
        return False
    return lands_on_cutoff(shift.clock_out_time, rules)


def is_suspicious(hours_worked: float, rules: FlagRules) -> bool:
    return 0 < hours_worked < rules.suspicious_hours


def detect_flags(shift: WorkedShift, rules: FlagRules) -> WorkedShift:
    """Return ``shift`` with auto-clockout and suspicious flags set.

    ``is_incomplete`` is owned by the reconciler and carried through as-is.
    """
    flags = ShiftFlags(
        is_incomplete=shift.flags.is_incomplete,
        is_auto_clock_out=is_auto_clock_out(shift, rules),
        is_suspicious=is_suspicious(shift.hours_worked, rules),
    )
    return replace(shift, flags=flags)


def annotate(shifts: Iterable[WorkedShift], rules: FlagRules) -> list[WorkedShift]:
    return [detect_flags(s, rules) for s in shifts]


def is_red_flag(shift: WorkedShift, rules: FlagRules) -> bool:
    """Triage predicate. Being currently clocked in (incomplete) is not an exception."""
    if shift.flags.is_auto_clock_out:
        return True
    if shift.hours_worked > rules.red_flag_max_hours:
        return True
    return 0 < shift.hours_worked < rules.red_flag_min_hours


def average_shift_hours(shifts: Iterable[WorkedShift], default: float = 8.0) -> float:
    completed = [s.hours_worked for s in shifts if s.is_complete and s.hours_worked > 0]
    if not completed:
        return default
    return sum(completed) / len(completed)
