from datetime import date, datetime, timezone

from payrecon.domain.display import format_clock_time, format_hours_minutes
from payrecon.domain.validation import (
    validate_correction_request, validate_date_range, validate_employee_id,
    validate_event_type, validate_pay_period, validate_payment_amount,
    validate_period_ended,
)
from zoneinfo import ZoneInfo

ET = ZoneInfo("America/New_York")


def test_employee_id():
    assert validate_employee_id(3).is_valid
    assert validate_employee_id("3").is_valid
    assert not validate_employee_id(None).is_valid
    assert not validate_employee_id("abc").is_valid
    assert not validate_employee_id(0).is_valid


def test_date_range():
    assert validate_date_range(date(2025, 1, 1), date(2025, 1, 1)).is_valid
    assert validate_date_range("2025-01-01", "2025-01-07").is_valid
    r = validate_date_range(date(2025, 1, 7), date(2025, 1, 1))
    assert not r.is_valid
    assert r.error_message == "End date must be after start date"
    assert not validate_date_range(None, date(2025, 1, 1)).is_valid
    assert not validate_date_range("01/01/2025", "2025-01-07").is_valid


def test_pay_period_end_is_exclusive():
    assert validate_pay_period(date(2025, 1, 13), date(2025, 1, 20)).is_valid
    assert not validate_pay_period(date(2025, 1, 13), date(2025, 1, 13)).is_valid


def test_period_must_have_ended():
    wednesday = date(2025, 1, 15)
    assert validate_period_ended(date(2025, 1, 13), wednesday).is_valid
    assert validate_period_ended(date(2025, 1, 16), wednesday).is_valid
    r = validate_period_ended(date(2025, 1, 20), wednesday)
    assert not r.is_valid
    assert r.error_message == "Pay period has not ended yet"


def test_payment_amount():
    assert validate_payment_amount(0.01).is_valid
    assert validate_payment_amount("600").is_valid
    for bad in (0, -5, None, "abc"):
        r = validate_payment_amount(bad)
        assert not r.is_valid
        assert r.error_message == "Please enter valid amount"


def test_correction_request():
    t_in = datetime(2025, 1, 13, 9, tzinfo=ET)
    t_out = datetime(2025, 1, 13, 17, tzinfo=ET)
    assert validate_correction_request(t_in, t_out).is_valid
    assert validate_correction_request(None, t_out).is_valid
    assert not validate_correction_request(None, None).is_valid
    assert not validate_correction_request(t_out, t_in).is_valid
    assert not validate_correction_request(datetime(2025, 1, 13, 9), None).is_valid


def test_event_type():
    assert validate_event_type("in").is_valid
    assert not validate_event_type("lunch").is_valid


def test_display_helpers():
    assert format_clock_time(datetime(2025, 1, 13, 23, 30, tzinfo=timezone.utc), ET) == "6:30 PM"
    assert format_clock_time(datetime(2025, 1, 13, 5, 5, tzinfo=timezone.utc), ET) == "12:05 AM"
    assert format_clock_time(None, ET) is None
    assert format_hours_minutes(8.5) == "8h 30m"
    assert format_hours_minutes(8) == "8h"
    assert format_hours_minutes(0.0833) == "0h 4m"
