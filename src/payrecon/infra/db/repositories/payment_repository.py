"""Repository for the append-only payment ledger. Inserts only; no update or delete."""
from __future__ import annotations
from collections import defaultdict
from datetime import date
from sqlmodel import Session, select
from payrecon.models.pay import PaymentRecord


class PaymentRepository:
    def __init__(self, session: Session) -> None:
        self._s = session

    def list_for_period(
        self, start: date, end: date, *, employee_id: int | None = None,
    ) -> list[PaymentRecord]:
        """Records whose ``pay_period_start`` falls in ``[start, end)``, in commit order."""
        stmt = select(PaymentRecord).where(
            PaymentRecord.pay_period_start >= start, PaymentRecord.pay_period_start < end,
        )
        if employee_id is not None:
            stmt = stmt.where(PaymentRecord.employee_id == employee_id)
        return list(self._s.exec(stmt.order_by(PaymentRecord.id)).all())

    def list_grouped_for_period(self, start: date, end: date) -> dict[int, list[PaymentRecord]]:
        grouped: dict[int, list[PaymentRecord]] = defaultdict(list)
        for rec in self.list_for_period(start, end):
            grouped[rec.employee_id].append(rec)
        return grouped

    def find_settlement(
        self, *, employee_id: int, arrangement_id: int, start: date, end: date,
    ) -> PaymentRecord | None:
        return self._s.exec(
            select(PaymentRecord).where(
                PaymentRecord.employee_id == employee_id,
                PaymentRecord.arrangement_id == arrangement_id,
                PaymentRecord.pay_period_start == start,
                PaymentRecord.pay_period_end == end,
            )
        ).first()

    def append(self, record: PaymentRecord) -> PaymentRecord:
        self._s.add(record)
        self._s.flush()
        return record

    def latest_by_employee(self, employee_ids: list[int]) -> dict[int, PaymentRecord]:
        """Most recent record per employee, across all periods."""
        if not employee_ids:
            return {}
        rows = self._s.exec(
            select(PaymentRecord)
            .where(PaymentRecord.employee_id.in_(employee_ids))
            .order_by(PaymentRecord.prepared_date, PaymentRecord.id)
        ).all()
        return {row.employee_id: row for row in rows}
