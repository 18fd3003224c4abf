"""Split-pay hour allocation across an employee's active pay-rate arrangements.

The default policy is a fixed business simplification, not an overtime-law
implementation: when an employee holds both a Biweekly and a Weekly
arrangement, the Biweekly one is paid the first 40 hours of the period and the
Weekly one only ever receives the hours beyond that.
"""
from __future__ import annotations
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping, Protocol, Sequence

from payrecon.domain.enums import PaymentMethod, PaySchedule, TaxClassification
from payrecon.domain.ledger import PaidInfo


class ArrangementLike(Protocol):
    id: int
    employee_id: int
    rate: float
    payment_method: PaymentMethod
    pay_schedule: PaySchedule
    tax_classification: TaxClassification
    effective_date: date


@dataclass(frozen=True)
class Allocation:
    arrangement_id: int
    pay_schedule: PaySchedule
    hours: float
    rate: float

    @property
    def amount(self) -> float:
        return round(self.hours * self.rate, 2)


@dataclass(frozen=True)
class QuickPaySuggestion:
    arrangement_id: int
    hours: float
    rate: float
    estimated_amount: float
    suggested_amount: int
    payment_method: PaymentMethod


def dedupe_active_arrangements(arrangements: Iterable[ArrangementLike]) -> list[ArrangementLike]:
    """Keep the latest row per (pay_schedule, tax_classification), ordered by id.

    A rate change inserts a new row, so older rows of the same kind are
    superseded rather than concurrent.
    """
    latest: dict[tuple[PaySchedule, TaxClassification], ArrangementLike] = {}
    for arr in arrangements:
        key = (PaySchedule(arr.pay_schedule), TaxClassification(arr.tax_classification))
        current = latest.get(key)
        if current is None or (arr.effective_date, arr.id) > (current.effective_date, current.id):
            latest[key] = arr
    return sorted(latest.values(), key=lambda a: a.id)


class AllocationPolicy(ABC):
    """Strategy for splitting a period's reconciled hours between arrangements."""

    @abstractmethod
    def allocate(
        self,
        total_hours: float,
        arrangements: Sequence[ArrangementLike],
        paid: Mapping[int, PaidInfo] | None = None,
    ) -> list[Allocation]:
        raise NotImplementedError


class BiweeklyFirstPolicy(AllocationPolicy):
    """Biweekly gets ``min(base, total)``; Weekly gets ``max(0, total - base)``.

    Already-paid arrangements are allocated 0. Within a schedule only the first
    arrangement (lowest id) receives the share, and arrangements with no pay
    schedule receive nothing while another arrangement is active, so the sum
    never exceeds ``total_hours``.
    """

    def __init__(self, base_hours: float = 40.0) -> None:
        self.base_hours = base_hours

    def allocate(self, total_hours, arrangements, paid=None):
        paid = paid or {}
        total_hours = max(total_hours, 0.0)
        if not arrangements:
            return []

        if len(arrangements) == 1:
            arr = arrangements[0]
            already = paid[arr.id].hours if arr.id in paid else 0.0
            hours = min(max(total_hours - already, 0.0), total_hours)
            return [Allocation(arr.id, PaySchedule(arr.pay_schedule), hours, float(arr.rate))]

        base_share = min(self.base_hours, total_hours)
        overtime_share = total_hours - base_share
        claimed: set[PaySchedule] = set()
        out: list[Allocation] = []
        for arr in arrangements:
            schedule = PaySchedule(arr.pay_schedule)
            if schedule is PaySchedule.BIWEEKLY:
                share = base_share
            elif schedule is PaySchedule.WEEKLY:
                share = overtime_share
            elif schedule is PaySchedule.NONE:
                share = 0.0
            else:  # pragma: no cover
                raise ValueError(f"Unhandled pay schedule: {schedule!r}")

            if schedule in claimed or arr.id in paid:
                share = 0.0
            claimed.add(schedule)
            out.append(Allocation(arr.id, schedule, share, float(arr.rate)))
        return out


DEFAULT_POLICY: AllocationPolicy = BiweeklyFirstPolicy()


def suggest_quick_pay(
    allocation: Allocation,
    last_method: PaymentMethod | None,
    fallback_method: PaymentMethod,
) -> QuickPaySuggestion:
    """One-click suggestion: amount floored to a whole currency unit.

    Nothing is committed here; the operator confirms (and may edit) the amount.
    """
    estimated = allocation.hours * allocation.rate
    # round first so 599.9999999 from float noise floors to 600, not 599
    suggested = math.floor(round(estimated, 6))
    return QuickPaySuggestion(
        arrangement_id=allocation.arrangement_id,
        hours=allocation.hours,
        rate=allocation.rate,
        estimated_amount=round(estimated, 2),
        suggested_amount=max(suggested, 0),
        payment_method=last_method or fallback_method,
    )
