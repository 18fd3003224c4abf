"""Repository for pay-rate arrangements. Returns raw rows; deduplication is the engine's job."""
from __future__ import annotations
from collections import defaultdict
from sqlmodel import Session, select
from payrecon.models.pay import PayRateArrangement


class PayRateRepository:
    def __init__(self, session: Session) -> None:
        self._s = session

    def get_by_id(self, arrangement_id: int) -> PayRateArrangement | None:
        return self._s.get(PayRateArrangement, arrangement_id)

    def list_by_employee(self, employee_id: int) -> list[PayRateArrangement]:
        return list(self._s.exec(
            select(PayRateArrangement)
            .where(PayRateArrangement.employee_id == employee_id)
            .order_by(PayRateArrangement.id)
        ).all())

    def list_grouped(self, employee_ids: list[int]) -> dict[int, list[PayRateArrangement]]:
        grouped: dict[int, list[PayRateArrangement]] = defaultdict(list)
        if not employee_ids:
            return grouped
        rows = self._s.exec(
            select(PayRateArrangement)
            .where(PayRateArrangement.employee_id.in_(employee_ids))
            .order_by(PayRateArrangement.id)
        ).all()
        for row in rows:
            grouped[row.employee_id].append(row)
        return grouped

    def create(self, arrangement: PayRateArrangement) -> PayRateArrangement:
        self._s.add(arrangement)
        self._s.flush()
        return arrangement
