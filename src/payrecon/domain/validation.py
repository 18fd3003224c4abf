"""Input validation that reports instead of raising.

Callers display ``error_message`` and let the operator retry without losing
other in-flight state.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from payrecon.domain.enums import ClockEventType


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error_message: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def fail(cls, message: str) -> "ValidationResult":
        return cls(False, message)


def validate_employee_id(employee_id) -> ValidationResult:
    if employee_id is None or employee_id == "":
        return ValidationResult.fail("Employee ID is required")
    try:
        value = int(employee_id)
    except (TypeError, ValueError):
        return ValidationResult.fail("Employee ID must be a number")
    if value <= 0:
        return ValidationResult.fail("Employee ID must be positive")
    return ValidationResult.ok()


def _coerce_date(value) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None
    return None


def validate_date_range(start, end) -> ValidationResult:
    """Both dates present and ``end >= start``."""
    if not start or not end:
        return ValidationResult.fail("Please select both start and end dates")
    start_d, end_d = _coerce_date(start), _coerce_date(end)
    if start_d is None or end_d is None:
        return ValidationResult.fail("Dates must be in YYYY-MM-DD format")
    if end_d < start_d:
        return ValidationResult.fail("End date must be after start date")
    return ValidationResult.ok()


def validate_pay_period(start, end) -> ValidationResult:
    """Pay periods are half-open, so the exclusive end must be strictly later."""
    result = validate_date_range(start, end)
    if not result.is_valid:
        return result
    if _coerce_date(end) == _coerce_date(start):
        return ValidationResult.fail("Pay period end must be after its start")
    return result


def validate_period_ended(end, today: date) -> ValidationResult:
    """The last day of the period (exclusive end minus one) must not be after ``today``."""
    end_d = _coerce_date(end)
    if end_d is None:
        return ValidationResult.fail("Dates must be in YYYY-MM-DD format")
    if end_d > today + timedelta(days=1):
        return ValidationResult.fail("Pay period has not ended yet")
    return ValidationResult.ok()


def validate_payment_amount(amount) -> ValidationResult:
    if amount is None:
        return ValidationResult.fail("Please enter valid amount")
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return ValidationResult.fail("Please enter valid amount")
    if value <= 0:
        return ValidationResult.fail("Please enter valid amount")
    return ValidationResult.ok()


def validate_clock_timestamp(ts) -> ValidationResult:
    if not isinstance(ts, datetime):
        return ValidationResult.fail("Timestamp is required")
    if ts.tzinfo is None:
        return ValidationResult.fail("Timestamp must include a timezone offset")
    return ValidationResult.ok()


def validate_correction_request(
    clock_in: datetime | None, clock_out: datetime | None,
) -> ValidationResult:
    """A shift edit needs at least one side, and out may not precede in."""
    if clock_in is None and clock_out is None:
        return ValidationResult.fail("Nothing to correct")
    for ts in (clock_in, clock_out):
        if ts is not None:
            result = validate_clock_timestamp(ts)
            if not result.is_valid:
                return result
    if clock_in is not None and clock_out is not None and clock_out <= clock_in:
        return ValidationResult.fail("Clock-out must be after clock-in")
    return ValidationResult.ok()


def validate_event_type(value) -> ValidationResult:
    try:
        ClockEventType(value)
    except ValueError:
        return ValidationResult.fail("Event type must be 'in' or 'out'")
    return ValidationResult.ok()
