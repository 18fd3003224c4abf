"""Time-clock use-case service: reconciled shifts and manual corrections.

Corrections report success as booleans instead of raising, so a shift edit
(clock-in and clock-out) can attempt both sides and report each outcome.
Each successful step is committed on its own; a later failure does not undo
an earlier success.
"""
from __future__ import annotations
import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from sqlalchemy.exc import SQLAlchemyError

from payrecon.config import settings
from payrecon.domain.display import format_clock_time, format_day_name, format_hours_minutes
from payrecon.domain.enums import ClockEventType, PeriodSelection
from payrecon.domain.exceptions import NotFoundError, ValidationFailed
from payrecon.domain.flags import FlagRules, annotate
from payrecon.domain.reconciler import has_incomplete, reconcile_events, total_hours
from payrecon.domain.shifts import WorkedShift
from payrecon.domain.validation import (
    validate_clock_timestamp, validate_correction_request, validate_event_type,
)
from payrecon.domain.week_window import compute_week_window
from payrecon.infra.db.uow import UnitOfWork
from payrecon.infra.db.repositories.clock_event_repository import ClockEventRepository
from payrecon.infra.db.repositories.employee_repository import EmployeeRepository
from payrecon.api.schemas.timeclock import (
    ClockEventCreate, ClockEventRead, CorrectionAction, CorrectionRequest, CorrectionResult,
    CorrectionStep, ShiftFlagsRead, ShiftList, WorkedShiftRead,
)

logger = logging.getLogger(__name__)


def shift_read(shift: WorkedShift, tz: ZoneInfo) -> WorkedShiftRead:
    return WorkedShiftRead(
        employee_id=shift.employee_id,
        date=shift.date,
        day_name=format_day_name(shift.clock_in_time, tz),
        clock_in_time=shift.clock_in_time,
        clock_out_time=shift.clock_out_time,
        clock_in=format_clock_time(shift.clock_in_time, tz),
        clock_out=format_clock_time(shift.clock_out_time, tz),
        hours_worked=shift.hours_worked,
        hours_display=format_hours_minutes(shift.hours_worked),
        flags=ShiftFlagsRead(
            is_incomplete=shift.flags.is_incomplete,
            is_auto_clock_out=shift.flags.is_auto_clock_out,
            is_suspicious=shift.flags.is_suspicious,
        ),
        clock_in_id=shift.source.in_id,
        clock_out_id=shift.source.out_id,
    )


class TimeClockService:
    def __init__(self, uow: UnitOfWork, *, now: datetime | None = None) -> None:
        self._uow = uow
        self._now = now
        self._tz = settings.business_tz

    def _ensure_employee(self, employee_id: int) -> None:
        if EmployeeRepository(self._uow.session).get_by_id(employee_id) is None:
            raise NotFoundError(f"Employee {employee_id} not found")

    # --- Reads ---

    def list_shifts(self, employee_id: int, selection: PeriodSelection) -> ShiftList:
        self._ensure_employee(employee_id)
        window = compute_week_window(selection, self._now or datetime.now(self._tz), self._tz)
        events = ClockEventRepository(self._uow.session).list_for_range(
            window.start_instant(self._tz), window.end_instant(self._tz), employee_id=employee_id,
        )
        shifts = annotate(reconcile_events(events, self._tz), FlagRules.from_settings(settings))
        return ShiftList(
            start=window.start,
            end=window.end,
            items=[shift_read(s, self._tz) for s in shifts],
            total_hours=total_hours(shifts),
            has_incomplete_shifts=has_incomplete(shifts),
        )

    # --- Terminal punches ---

    def record_event(self, employee_id: int, payload: ClockEventCreate) -> ClockEventRead:
        """Store a punch as the clock terminal would (not a manual edit)."""
        self._ensure_employee(employee_id)
        event = ClockEventRepository(self._uow.session).create(
            employee_id=employee_id, event_type=payload.event_type, timestamp=payload.timestamp,
        )
        self._uow.commit()
        return ClockEventRead.model_validate(event)

    # --- Manual corrections ---

    def create_event(self, employee_id: int, event_type: ClockEventType | str, timestamp: datetime) -> bool:
        for check in (validate_event_type(event_type), validate_clock_timestamp(timestamp)):
            if not check.is_valid:
                logger.warning("Rejected clock event for employee %s: %s", employee_id, check.error_message)
                return False
        try:
            if EmployeeRepository(self._uow.session).get_by_id(employee_id) is None:
                logger.warning("Rejected clock event: employee %s not found", employee_id)
                return False
            ClockEventRepository(self._uow.session).create(
                employee_id=employee_id,
                event_type=ClockEventType(event_type),
                timestamp=timestamp,
                manually_edited=True,
            )
            self._uow.commit()
        except SQLAlchemyError:
            self._uow.rollback()
            logger.exception("Failed to create clock event for employee %s", employee_id)
            return False
        logger.info("Created %s event for employee %s", ClockEventType(event_type).value, employee_id)
        return True

    def update_event(self, event_id: int, timestamp: datetime, *, employee_id: int | None = None) -> bool:
        check = validate_clock_timestamp(timestamp)
        if not check.is_valid:
            logger.warning("Rejected update of clock event %s: %s", event_id, check.error_message)
            return False
        try:
            repo = ClockEventRepository(self._uow.session)
            event = repo.get_by_id(event_id)
            if event is None or (employee_id is not None and event.employee_id != employee_id):
                logger.warning("Rejected update: clock event %s not found", event_id)
                return False
            repo.update_timestamp(event, timestamp)
            self._uow.commit()
        except SQLAlchemyError:
            self._uow.rollback()
            logger.exception("Failed to update clock event %s", event_id)
            return False
        logger.info("Updated clock event %s", event_id)
        return True

    def apply_corrections(self, employee_id: int, payload: CorrectionRequest) -> CorrectionResult:
        """Apply a shift edit: clock-in first, then clock-out.

        Overall success is false if any step failed; applied steps stay applied.
        """
        check = validate_correction_request(payload.clock_in_time, payload.clock_out_time)
        if not check.is_valid:
            raise ValidationFailed(check)

        steps: list[CorrectionStep] = []
        sides = (
            (ClockEventType.IN, payload.clock_in_id, payload.clock_in_time),
            (ClockEventType.OUT, payload.clock_out_id, payload.clock_out_time),
        )
        for event_type, event_id, ts in sides:
            if ts is None:
                continue
            if event_id is not None:
                ok = self.update_event(event_id, ts, employee_id=employee_id)
                action = CorrectionAction.UPDATE
            else:
                ok = self.create_event(employee_id, event_type, ts)
                action = CorrectionAction.CREATE
            steps.append(CorrectionStep(event_type=event_type, action=action, event_id=event_id, success=ok))

        success = all(s.success for s in steps)
        if not success:
            logger.warning(
                "Shift correction for employee %s partially failed: %s",
                employee_id, [s.model_dump() for s in steps],
            )
        return CorrectionResult(success=success, steps=steps)
