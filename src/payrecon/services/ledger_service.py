"""Payment ledger use-case service.

Commit appends exactly one immutable record. Double settlement is prevented at
the storage boundary: a check-then-insert inside the unit of work, backed by
the unique (employee, arrangement, period) constraint for operators racing
each other.
"""
from __future__ import annotations
import logging
from datetime import date, datetime

from sqlalchemy.exc import IntegrityError

from payrecon.config import settings
from payrecon.domain.allocation import dedupe_active_arrangements
from payrecon.domain.enums import PaymentStatus
from payrecon.domain.exceptions import ConflictError, NotFoundError, ValidationFailed
from payrecon.domain.ledger import arrangement_status, build_paid_map, can_commit
from payrecon.domain.validation import (
    validate_employee_id, validate_pay_period, validate_payment_amount,
    validate_period_ended,
)
from payrecon.infra.db.uow import UnitOfWork
from payrecon.infra.db.repositories.employee_repository import EmployeeRepository
from payrecon.infra.db.repositories.pay_rate_repository import PayRateRepository
from payrecon.infra.db.repositories.payment_repository import PaymentRepository
from payrecon.models.pay import PaymentRecord
from payrecon.api.schemas.ledger import (
    PaymentCommitRequest, PaymentRecordList, PaymentRecordRead, SettlementStatusRead,
)

logger = logging.getLogger(__name__)


class LedgerService:
    def __init__(self, uow: UnitOfWork, *, now: datetime | None = None) -> None:
        self._uow = uow
        self._now = now

    def _ensure_employee(self, employee_id: int) -> None:
        if EmployeeRepository(self._uow.session).get_by_id(employee_id) is None:
            raise NotFoundError(f"Employee {employee_id} not found")

    def _business_today(self) -> date:
        return (self._now or datetime.now(settings.business_tz)).astimezone(settings.business_tz).date()

    def commit_payment(self, payload: PaymentCommitRequest) -> PaymentRecordRead:
        for check in (
            validate_employee_id(payload.employee_id),
            validate_pay_period(payload.pay_period_start, payload.pay_period_end),
            validate_payment_amount(payload.gross_amount),
            validate_period_ended(payload.pay_period_end, self._business_today()),
        ):
            if not check.is_valid:
                raise ValidationFailed(check)

        self._ensure_employee(payload.employee_id)
        arrangement = PayRateRepository(self._uow.session).get_by_id(payload.arrangement_id)
        if arrangement is None or arrangement.employee_id != payload.employee_id:
            raise NotFoundError(
                f"Arrangement {payload.arrangement_id} not found for employee {payload.employee_id}"
            )

        repo = PaymentRepository(self._uow.session)
        existing = repo.find_settlement(
            employee_id=payload.employee_id,
            arrangement_id=payload.arrangement_id,
            start=payload.pay_period_start,
            end=payload.pay_period_end,
        )
        current = PaymentStatus.PAID if existing else PaymentStatus.UNPAID
        if not can_commit(current):
            raise ConflictError(
                f"Arrangement {payload.arrangement_id} already settled for "
                f"{payload.pay_period_start} to {payload.pay_period_end} (record {existing.id})"
            )

        record = PaymentRecord(
            employee_id=payload.employee_id,
            arrangement_id=payload.arrangement_id,
            pay_period_start=payload.pay_period_start,
            pay_period_end=payload.pay_period_end,
            hours_worked=payload.hours_worked,
            hourly_rate=payload.hourly_rate,
            estimated_amount=round(payload.hours_worked * payload.hourly_rate, 2),
            gross_amount=round(payload.gross_amount, 2),
            payment_method=payload.payment_method,
            check_number=payload.check_number or None,
            notes=payload.notes or None,
            prepared_date=self._business_today(),
        )
        try:
            repo.append(record)
            self._uow.commit()
        except IntegrityError as exc:
            self._uow.rollback()
            logger.warning(
                "Concurrent settlement rejected for employee %s arrangement %s",
                payload.employee_id, payload.arrangement_id,
            )
            raise ConflictError(
                f"Arrangement {payload.arrangement_id} already settled for "
                f"{payload.pay_period_start} to {payload.pay_period_end}"
            ) from exc

        logger.info(
            "Committed payment %s: employee %s arrangement %s gross %.2f (estimated %.2f)",
            record.id, record.employee_id, record.arrangement_id,
            record.gross_amount, record.estimated_amount,
        )
        return PaymentRecordRead.model_validate(record)

    def get_status(
        self, employee_id: int, arrangement_id: int, start: date, end: date,
    ) -> SettlementStatusRead:
        check = validate_pay_period(start, end)
        if not check.is_valid:
            raise ValidationFailed(check)
        self._ensure_employee(employee_id)
        rates = PayRateRepository(self._uow.session)
        arrangement = rates.get_by_id(arrangement_id)
        if arrangement is None or arrangement.employee_id != employee_id:
            raise NotFoundError(f"Arrangement {arrangement_id} not found for employee {employee_id}")
        active = dedupe_active_arrangements(rates.list_by_employee(employee_id))
        records = PaymentRepository(self._uow.session).list_for_period(
            start, end, employee_id=employee_id,
        )
        paid = build_paid_map(records, active)
        info = paid.get(arrangement_id)
        return SettlementStatusRead(
            employee_id=employee_id,
            arrangement_id=arrangement_id,
            pay_period_start=start,
            pay_period_end=end,
            status=arrangement_status(arrangement_id, paid),
            record_id=info.record_id if info else None,
        )

    def list_payments(self, employee_id: int, start: date, end: date) -> PaymentRecordList:
        check = validate_pay_period(start, end)
        if not check.is_valid:
            raise ValidationFailed(check)
        self._ensure_employee(employee_id)
        records = PaymentRepository(self._uow.session).list_for_period(
            start, end, employee_id=employee_id,
        )
        return PaymentRecordList(
            items=[PaymentRecordRead.model_validate(r) for r in records],
            total=len(records),
        )
