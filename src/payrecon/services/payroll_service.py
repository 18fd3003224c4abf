"""Payroll period use-case service.

Pipeline per employee: raw events -> reconciled shifts -> flagged shifts ->
allocated hours -> ledger status. Everything is recomputed from current rows
on each call.
"""
from __future__ import annotations
import logging
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError

from payrecon.config import settings
from payrecon.domain.allocation import (
    AllocationPolicy, BiweeklyFirstPolicy, dedupe_active_arrangements, suggest_quick_pay,
)
from payrecon.domain.enums import PaymentMethod, PaymentStatus, PaySchedule, PeriodSelection
from payrecon.domain.exceptions import NotFoundError, PayrollLoadError
from payrecon.domain.flags import FlagRules, annotate, average_shift_hours, is_red_flag
from payrecon.domain.ledger import arrangement_status, build_paid_map, employee_status
from payrecon.domain.reconciler import has_incomplete, reconcile_by_employee, total_hours
from payrecon.domain.shifts import WorkedShift
from payrecon.domain.validation import validate_period_ended
from payrecon.domain.week_window import WeekWindow, compute_week_window
from payrecon.infra.db.uow import UnitOfWork
from payrecon.infra.db.repositories.clock_event_repository import ClockEventRepository
from payrecon.infra.db.repositories.employee_repository import EmployeeRepository
from payrecon.infra.db.repositories.pay_rate_repository import PayRateRepository
from payrecon.infra.db.repositories.payment_repository import PaymentRepository
from payrecon.models.core import Employee
from payrecon.models.pay import PaymentRecord, PayRateArrangement
from payrecon.api.schemas.pay_rates import PayRateRead
from payrecon.api.schemas.payroll import (
    AllocationRead, EmployeePayrollSummary, FlaggedActivity, FlaggedActivityList,
    PayrollPeriodResponse, QuickPayRead, RedFlagEmployee, RedFlagResponse, WeekWindowRead,
)
from payrecon.services.timeclock_service import shift_read

logger = logging.getLogger(__name__)

SUSPICIOUS_REASON = "Shift under 5 minutes"


@dataclass
class _PeriodData:
    employees: list[Employee]
    shifts: dict[int, list[WorkedShift]]
    arrangements: dict[int, list[PayRateArrangement]]
    payments: dict[int, list[PaymentRecord]]
    last_payments: dict[int, PaymentRecord] = field(default_factory=dict)


def window_read(window: WeekWindow) -> WeekWindowRead:
    return WeekWindowRead(
        selection=window.selection, start=window.start, end=window.end,
        display_end=window.display_end,
    )


def payment_lookup_start(window: WeekWindow) -> date:
    """Earliest ``pay_period_start`` that counts toward ``window``.

    A Biweekly settlement for the pair of weeks ending last Sunday starts a week
    before the ``last`` window, so that view looks one week further back. Records
    from that extra week only count if their period runs into ``window``.
    """
    if window.selection is PeriodSelection.LAST:
        return window.start - timedelta(days=7)
    return window.start


class PayrollService:
    def __init__(
        self,
        uow: UnitOfWork,
        *,
        now: datetime | None = None,
        policy: AllocationPolicy | None = None,
    ) -> None:
        self._uow = uow
        self._now = now
        self._tz = settings.business_tz
        self._rules = FlagRules.from_settings(settings)
        self._policy = policy or BiweeklyFirstPolicy(settings.SPLIT_PAY_BASE_HOURS)

    # --- Window ---

    def window(self, selection: PeriodSelection) -> WeekWindow:
        return compute_week_window(selection, self._now or datetime.now(self._tz), self._tz)

    def get_window(self, selection: PeriodSelection) -> WeekWindowRead:
        return window_read(self.window(selection))

    def _settleable(self, window: WeekWindow) -> bool:
        today = (self._now or datetime.now(self._tz)).astimezone(self._tz).date()
        return validate_period_ended(window.end, today).is_valid

    # --- Loading ---

    def _load(self, window: WeekWindow) -> _PeriodData:
        """Load every input for the period or fail the whole period."""
        s = self._uow.session
        try:
            employees = [
                e for e in EmployeeRepository(s).list_all(active_only=True) if not e.is_test_user
            ]
            ids = [e.id for e in employees]
            events = ClockEventRepository(s).list_for_range(
                window.start_instant(self._tz), window.end_instant(self._tz),
            )
            arrangements = PayRateRepository(s).list_grouped(ids)
            payment_repo = PaymentRepository(s)
            payments = {
                emp_id: [r for r in recs if window.overlaps(r.pay_period_start, r.pay_period_end)]
                for emp_id, recs in payment_repo.list_grouped_for_period(
                    payment_lookup_start(window), window.end,
                ).items()
            }
            last_payments = payment_repo.latest_by_employee(ids)
        except SQLAlchemyError as exc:
            logger.exception("Payroll load failed for %s..%s", window.start, window.end)
            raise PayrollLoadError(
                f"Could not load payroll data for {window.start} to {window.display_end}"
            ) from exc

        allowed = set(ids)
        shifts = {
            emp_id: annotate(emp_shifts, self._rules)
            for emp_id, emp_shifts in reconcile_by_employee(
                (ev for ev in events if ev.employee_id in allowed), self._tz,
            ).items()
        }
        return _PeriodData(employees, shifts, arrangements, payments, last_payments)

    # --- Summaries ---

    def _summarize(
        self, employee: Employee, data: _PeriodData, *, settleable: bool = True,
    ) -> EmployeePayrollSummary:
        shifts = data.shifts.get(employee.id, [])
        hours = total_hours(shifts)
        active = dedupe_active_arrangements(data.arrangements.get(employee.id, []))
        paid = build_paid_map(data.payments.get(employee.id, []), active)

        expected = self._policy.allocate(hours, active)
        remaining = {a.arrangement_id: a for a in self._policy.allocate(hours, active, paid)}
        by_id = {a.id: a for a in active}
        last = data.last_payments.get(employee.id)
        last_method = PaymentMethod(last.payment_method) if last else None

        allocations: list[AllocationRead] = []
        quick_pay: list[QuickPayRead] = []
        for alloc in expected:
            arr = by_id[alloc.arrangement_id]
            status = arrangement_status(arr.id, paid)
            info = paid.get(arr.id)
            current = remaining[arr.id]
            allocations.append(AllocationRead(
                arrangement_id=arr.id,
                pay_schedule=arr.pay_schedule,
                tax_classification=arr.tax_classification,
                hours=current.hours,
                rate=current.rate,
                amount=current.amount,
                status=status,
                paid_hours=info.hours if info else None,
                paid_amount=info.pay if info else None,
            ))
            if settleable and status is PaymentStatus.UNPAID and current.hours > 0:
                q = suggest_quick_pay(current, last_method, PaymentMethod(arr.payment_method))
                quick_pay.append(QuickPayRead(**asdict(q)))

        return EmployeePayrollSummary(
            employee_id=employee.id,
            name=employee.display_name,
            role=employee.role,
            total_hours=hours,
            has_incomplete_shifts=has_incomplete(shifts),
            worked_shifts=[shift_read(s, self._tz) for s in shifts],
            arrangements=[PayRateRead.model_validate(a) for a in active],
            allocations=allocations,
            quick_pay=quick_pay,
            status=employee_status(active, paid),
            paid_arrangements=sum(1 for a in active if a.id in paid),
            total_pay=round(sum(a.amount for a in expected), 2),
            paid_amount=round(sum(p.pay for p in paid.values()), 2),
            last_payment_method=last_method,
        )

    @staticmethod
    def _visible(summary: EmployeePayrollSummary, selection: PeriodSelection) -> bool:
        if not (summary.total_hours > 0 or summary.has_incomplete_shifts):
            return False
        schedules = {a.pay_schedule for a in summary.arrangements}
        if selection is PeriodSelection.LAST:
            return PaySchedule.WEEKLY in schedules
        if selection is PeriodSelection.LAST_PAY_PERIOD:
            return PaySchedule.BIWEEKLY in schedules
        return True

    def _summaries(self, window: WeekWindow) -> list[EmployeePayrollSummary]:
        data = self._load(window)
        settleable = self._settleable(window)
        summaries = [self._summarize(e, data, settleable=settleable) for e in data.employees]
        visible = [s for s in summaries if self._visible(s, window.selection)]
        visible.sort(key=lambda s: s.name.lower())
        logger.info(
            "Payroll %s %s..%s: %d of %d employees visible",
            window.selection.value, window.start, window.display_end, len(visible), len(summaries),
        )
        return visible

    @staticmethod
    def _flagged(summaries: list[EmployeePayrollSummary]) -> list[FlaggedActivity]:
        out: list[FlaggedActivity] = []
        for emp in summaries:
            for shift in emp.worked_shifts:
                if shift.flags.is_suspicious and shift.clock_out:
                    out.append(FlaggedActivity(
                        employee_id=emp.employee_id,
                        employee_name=emp.name,
                        date=shift.date,
                        day_name=shift.day_name,
                        clock_in=shift.clock_in,
                        clock_out=shift.clock_out,
                        hours_worked=shift.hours_worked,
                        reason=SUSPICIOUS_REASON,
                    ))
        return out

    def get_period(self, selection: PeriodSelection) -> PayrollPeriodResponse:
        window = self.window(selection)
        summaries = self._summaries(window)
        return PayrollPeriodResponse(
            window=window_read(window),
            employees=summaries,
            flagged_activity=self._flagged(summaries),
            total_hours=sum(s.total_hours for s in summaries),
            total_payroll=round(sum(s.total_pay for s in summaries), 2),
            paid_count=sum(1 for s in summaries if s.status is PaymentStatus.PAID),
        )

    def list_flagged_activity(self, selection: PeriodSelection) -> FlaggedActivityList:
        window = self.window(selection)
        items = self._flagged(self._summaries(window))
        return FlaggedActivityList(window=window_read(window), items=items, total=len(items))

    def list_red_flags(self, selection: PeriodSelection) -> RedFlagResponse:
        """Triage view: only employees with red-flag shifts, carrying only those shifts."""
        window = self.window(selection)
        data = self._load(window)
        employees: list[RedFlagEmployee] = []
        for emp in sorted(data.employees, key=lambda e: e.display_name.lower()):
            shifts = data.shifts.get(emp.id, [])
            flagged = [s for s in shifts if is_red_flag(s, self._rules)]
            if not flagged:
                continue
            employees.append(RedFlagEmployee(
                employee_id=emp.id,
                name=emp.display_name,
                shifts=[shift_read(s, self._tz) for s in flagged],
                flagged_hours=sum(s.hours_worked for s in flagged),
                average_shift_hours=average_shift_hours(shifts),
            ))
        return RedFlagResponse(
            window=window_read(window),
            employees=employees,
            total_flagged_shifts=sum(len(e.shifts) for e in employees),
        )

    # --- Quick pay ---

    def suggest_quick_pay(
        self, employee_id: int, arrangement_id: int, selection: PeriodSelection,
    ) -> QuickPayRead:
        window = self.window(selection)
        data = self._load(window)
        employee = next((e for e in data.employees if e.id == employee_id), None)
        if employee is None:
            raise NotFoundError(f"Employee {employee_id} not found")
        summary = self._summarize(employee, data, settleable=self._settleable(window))
        for q in summary.quick_pay:
            if q.arrangement_id == arrangement_id:
                return q
        if not any(a.id == arrangement_id for a in summary.arrangements):
            raise NotFoundError(
                f"Arrangement {arrangement_id} is not active for employee {employee_id}"
            )
        alloc = next(a for a in summary.allocations if a.arrangement_id == arrangement_id)
        # Paid, nothing left to pay, or the period is still open: suggest zero.
        return QuickPayRead(
            arrangement_id=arrangement_id, hours=0.0, rate=alloc.rate, estimated_amount=0.0,
            suggested_amount=0,
            payment_method=summary.last_payment_method or next(
                a.payment_method for a in summary.arrangements if a.id == arrangement_id
            ),
        )
