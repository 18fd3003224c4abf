from dataclasses import dataclass
from datetime import date

import pytest

from payrecon.domain.allocation import (
    Allocation, BiweeklyFirstPolicy, dedupe_active_arrangements, suggest_quick_pay,
)
from payrecon.domain.enums import PaymentMethod, PaySchedule, TaxClassification
from payrecon.domain.ledger import PaidInfo


@dataclass
class Arr:
    id: int
    rate: float
    pay_schedule: PaySchedule
    tax_classification: TaxClassification = TaxClassification.NONE
    effective_date: date = date(2025, 1, 1)
    employee_id: int = 1
    payment_method: PaymentMethod = PaymentMethod.CASH


BIWEEKLY = Arr(1, 15.0, PaySchedule.BIWEEKLY, TaxClassification.W2)
WEEKLY = Arr(2, 20.0, PaySchedule.WEEKLY, TaxClassification.CONTRACTOR_1099)

policy = BiweeklyFirstPolicy()


def _by_id(allocs):
    return {a.arrangement_id: a for a in allocs}


def test_split_pay_with_overtime():
    out = _by_id(policy.allocate(45, [BIWEEKLY, WEEKLY]))
    assert (out[1].hours, out[1].amount) == (40, 600.0)
    assert (out[2].hours, out[2].amount) == (5, 100.0)


def test_split_pay_under_base_hours():
    out = _by_id(policy.allocate(30, [BIWEEKLY, WEEKLY]))
    assert (out[1].hours, out[1].amount) == (30, 450.0)
    assert (out[2].hours, out[2].amount) == (0, 0.0)


def test_single_arrangement_gets_everything():
    out = policy.allocate(12.5, [WEEKLY])
    assert out == [Allocation(2, PaySchedule.WEEKLY, 12.5, 20.0)]


def test_single_arrangement_subtracts_paid_hours():
    out = policy.allocate(10, [WEEKLY], {2: PaidInfo(hours=4, pay=80, record_id=1)})
    assert out[0].hours == 6
    over = policy.allocate(10, [WEEKLY], {2: PaidInfo(hours=12, pay=240, record_id=1)})
    assert over[0].hours == 0


def test_paid_arrangement_gets_zero_in_split_pay():
    out = _by_id(policy.allocate(45, [BIWEEKLY, WEEKLY], {1: PaidInfo(40, 600, 9)}))
    assert out[1].hours == 0
    assert out[2].hours == 5


def test_no_schedule_arrangement_gets_nothing_when_split():
    other = Arr(3, 30.0, PaySchedule.NONE)
    out = _by_id(policy.allocate(45, [BIWEEKLY, WEEKLY, other]))
    assert out[3].hours == 0


def test_duplicate_schedule_only_first_receives_share():
    second = Arr(5, 16.0, PaySchedule.BIWEEKLY, TaxClassification.CONTRACTOR_1099)
    out = _by_id(policy.allocate(30, [BIWEEKLY, second]))
    assert out[1].hours == 30
    assert out[5].hours == 0


@pytest.mark.parametrize("hours", [0, 0.08, 20, 40, 40.01, 61.5])
def test_allocated_hours_never_exceed_total(hours):
    arrs = [BIWEEKLY, WEEKLY, Arr(3, 30.0, PaySchedule.NONE)]
    assert sum(a.hours for a in policy.allocate(hours, arrs)) <= hours + 1e-9


def test_custom_base_hours():
    out = _by_id(BiweeklyFirstPolicy(base_hours=35).allocate(45, [BIWEEKLY, WEEKLY]))
    assert (out[1].hours, out[2].hours) == (35, 10)


def test_no_arrangements():
    assert policy.allocate(10, []) == []


def test_dedupe_keeps_latest_per_kind():
    old = Arr(1, 15.0, PaySchedule.BIWEEKLY, TaxClassification.W2, effective_date=date(2024, 6, 1))
    new = Arr(4, 17.0, PaySchedule.BIWEEKLY, TaxClassification.W2, effective_date=date(2025, 1, 1))
    active = dedupe_active_arrangements([new, WEEKLY, old])
    assert [a.id for a in active] == [2, 4]


def test_dedupe_same_effective_date_prefers_higher_id():
    a = Arr(1, 15.0, PaySchedule.WEEKLY)
    b = Arr(2, 16.0, PaySchedule.WEEKLY)
    assert dedupe_active_arrangements([b, a]) == [b]


def test_quick_pay_floors_suggestion():
    q = suggest_quick_pay(Allocation(1, PaySchedule.WEEKLY, 7.75, 15.5), None, PaymentMethod.CHECK)
    assert q.estimated_amount == 120.12
    assert q.suggested_amount == 120
    assert q.payment_method is PaymentMethod.CHECK


def test_quick_pay_float_noise_does_not_lose_a_dollar():
    q = suggest_quick_pay(Allocation(1, PaySchedule.WEEKLY, 0.29 * 100, 1.0), None, PaymentMethod.CASH)
    assert q.suggested_amount == 29


def test_quick_pay_prefers_last_method():
    q = suggest_quick_pay(Allocation(1, PaySchedule.WEEKLY, 5, 20), PaymentMethod.CHECK, PaymentMethod.CASH)
    assert q.payment_method is PaymentMethod.CHECK
