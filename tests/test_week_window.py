from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from payrecon.domain.enums import PeriodSelection
from payrecon.domain.week_window import business_now, compute_week_window, monday_of

ET = ZoneInfo("America/New_York")


def test_this_week_from_wednesday():
    w = compute_week_window(PeriodSelection.THIS, datetime(2025, 1, 15, 12, 0, tzinfo=ET), ET)
    assert w.start == date(2025, 1, 13)
    assert w.end == date(2025, 1, 20)
    assert w.display_end == date(2025, 1, 19)
    assert w.days == 7


def test_last_week_and_last_pay_period():
    now = datetime(2025, 1, 15, 12, 0, tzinfo=ET)
    last = compute_week_window("last", now, ET)
    assert (last.start, last.end) == (date(2025, 1, 6), date(2025, 1, 13))

    pay = compute_week_window(PeriodSelection.LAST_PAY_PERIOD, now, ET)
    assert (pay.start, pay.end) == (date(2024, 12, 30), date(2025, 1, 13))
    assert pay.days == 14


def test_window_uses_business_date_not_utc_date():
    # 02:00 UTC Monday is still Sunday evening in New York.
    now = datetime(2025, 1, 20, 2, 0, tzinfo=timezone.utc)
    w = compute_week_window(PeriodSelection.THIS, now, ET)
    assert w.start == date(2025, 1, 13)


def test_sunday_belongs_to_the_week_that_started_monday():
    w = compute_week_window(PeriodSelection.THIS, datetime(2025, 1, 19, 23, 59, tzinfo=ET), ET)
    assert w.start == date(2025, 1, 13)
    assert w.display_end == date(2025, 1, 19)
    assert w.end == date(2025, 1, 20)


def test_overlaps_is_half_open():
    w = compute_week_window(PeriodSelection.LAST, datetime(2025, 1, 15, 12, tzinfo=ET), ET)
    assert w.overlaps(date(2024, 12, 30), date(2025, 1, 13))
    assert w.overlaps(date(2025, 1, 12), date(2025, 1, 13))
    assert not w.overlaps(date(2024, 12, 30), date(2025, 1, 6))
    assert not w.overlaps(date(2025, 1, 13), date(2025, 1, 20))


def test_instants_are_business_midnight():
    w = compute_week_window(PeriodSelection.THIS, datetime(2025, 1, 15, tzinfo=ET), ET)
    assert w.start_instant(ET).astimezone(timezone.utc) == datetime(2025, 1, 13, 5, 0, tzinfo=timezone.utc)


def test_business_now_rejects_naive():
    with pytest.raises(ValueError):
        business_now(ET, datetime(2025, 1, 15, 12, 0))


def test_monday_of():
    assert monday_of(date(2025, 1, 13)) == date(2025, 1, 13)
    assert monday_of(date(2025, 1, 19)) == date(2025, 1, 13)
