"""Paid/partial/unpaid derivation over the append-only payment ledger.

Status is computed at read time and never stored. Per (employee, arrangement,
period) there is one transition, ``UNPAID --commit--> PAID``; PAID is terminal
and a correction is a new record, not a reversal.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from payrecon.domain.enums import PaymentStatus


class PaymentRecordLike(Protocol):
    id: int
    employee_id: int
    arrangement_id: int | None
    hours_worked: float
    gross_amount: float


class HasId(Protocol):
    id: int


@dataclass(frozen=True)
class PaidInfo:
    hours: float
    pay: float
    record_id: int


def build_paid_map(
    records: Iterable[PaymentRecordLike], arrangements: Sequence[HasId],
) -> dict[int, PaidInfo]:
    """Map arrangement id -> the record that settled it.

    Records are processed in id order and the last one seen for an arrangement
    wins. Legacy records without an arrangement id count as records for the
    first active arrangement and take part in the same last-wins pass.
    """
    first_id = arrangements[0].id if arrangements else None
    paid: dict[int, PaidInfo] = {}
    for rec in sorted(records, key=lambda r: r.id):
        target = rec.arrangement_id if rec.arrangement_id is not None else first_id
        if target is None:
            continue
        paid[target] = PaidInfo(float(rec.hours_worked), float(rec.gross_amount), rec.id)
    return paid


def arrangement_status(arrangement_id: int, paid: dict[int, PaidInfo]) -> PaymentStatus:
    return PaymentStatus.PAID if arrangement_id in paid else PaymentStatus.UNPAID


def employee_status(arrangements: Sequence[HasId], paid: dict[int, PaidInfo]) -> PaymentStatus:
    """``paid`` iff every visible arrangement is settled, ``partial`` iff some are."""
    if not arrangements:
        return PaymentStatus.UNPAID
    settled = sum(1 for a in arrangements if a.id in paid)
    if settled == len(arrangements):
        return PaymentStatus.PAID
    if settled:
        return PaymentStatus.PARTIAL
    return PaymentStatus.UNPAID


def can_commit(current: PaymentStatus) -> bool:
    return current is PaymentStatus.UNPAID
