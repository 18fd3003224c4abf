"""Clock event, shift and correction endpoints."""
from datetime import datetime
from fastapi import APIRouter, Depends
from payrecon.api.deps import get_now, get_uow
from payrecon.api.schemas.timeclock import (
    ClockEventCreate, ClockEventRead, ClockEventUpdate, CorrectionRequest, CorrectionResult,
    EventMutationResult, ShiftList,
)
from payrecon.domain.enums import PeriodSelection
from payrecon.infra.db.uow import UnitOfWork
from payrecon.services.timeclock_service import TimeClockService

router = APIRouter(tags=["timeclock"])


@router.post("/employees/{employee_id}/clock-events", response_model=ClockEventRead, status_code=201)
def record_event(
    employee_id: int, payload: ClockEventCreate, uow: UnitOfWork = Depends(get_uow),
) -> ClockEventRead:
    return TimeClockService(uow).record_event(employee_id, payload)


@router.get("/employees/{employee_id}/shifts", response_model=ShiftList)
def list_shifts(
    employee_id: int,
    period: PeriodSelection = PeriodSelection.THIS,
    uow: UnitOfWork = Depends(get_uow),
    now: datetime | None = Depends(get_now),
) -> ShiftList:
    return TimeClockService(uow, now=now).list_shifts(employee_id, period)


@router.post("/employees/{employee_id}/corrections", response_model=CorrectionResult)
def apply_corrections(
    employee_id: int, payload: CorrectionRequest, uow: UnitOfWork = Depends(get_uow),
) -> CorrectionResult:
    return TimeClockService(uow).apply_corrections(employee_id, payload)


@router.patch("/clock-events/{event_id}", response_model=EventMutationResult)
def update_event(
    event_id: int, payload: ClockEventUpdate, uow: UnitOfWork = Depends(get_uow),
) -> EventMutationResult:
    return EventMutationResult(success=TimeClockService(uow).update_event(event_id, payload.timestamp))
