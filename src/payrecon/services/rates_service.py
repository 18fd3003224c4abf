"""Pay-rate use-case service. Setting a rate always inserts a new row."""
from __future__ import annotations
import logging
from datetime import datetime

from payrecon.config import settings
from payrecon.domain.allocation import dedupe_active_arrangements
from payrecon.domain.exceptions import NotFoundError
from payrecon.infra.db.uow import UnitOfWork
from payrecon.infra.db.repositories.employee_repository import EmployeeRepository
from payrecon.infra.db.repositories.pay_rate_repository import PayRateRepository
from payrecon.models.pay import PayRateArrangement
from payrecon.api.schemas.pay_rates import PayRateCreate, PayRateList, PayRateRead

logger = logging.getLogger(__name__)


class RatesService:
    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def _ensure_employee(self, employee_id: int) -> None:
        if EmployeeRepository(self._uow.session).get_by_id(employee_id) is None:
            raise NotFoundError(f"Employee {employee_id} not found")

    def set_rate(self, employee_id: int, payload: PayRateCreate) -> PayRateRead:
        self._ensure_employee(employee_id)
        effective = payload.effective_date or datetime.now(settings.business_tz).date()
        arrangement = PayRateRepository(self._uow.session).create(PayRateArrangement(
            employee_id=employee_id,
            rate=payload.rate,
            payment_method=payload.payment_method,
            pay_schedule=payload.pay_schedule,
            tax_classification=payload.tax_classification,
            effective_date=effective,
        ))
        self._uow.commit()
        logger.info(
            "New %s/%s rate %.2f for employee %s effective %s",
            payload.pay_schedule.value, payload.tax_classification.value,
            payload.rate, employee_id, effective,
        )
        return PayRateRead.model_validate(arrangement)

    def list_rates(self, employee_id: int, *, active_only: bool = False) -> PayRateList:
        self._ensure_employee(employee_id)
        rows = PayRateRepository(self._uow.session).list_by_employee(employee_id)
        if active_only:
            rows = dedupe_active_arrangements(rows)
        return PayRateList(items=[PayRateRead.model_validate(r) for r in rows], total=len(rows))
