"""Payroll period endpoints."""
from datetime import datetime
from fastapi import APIRouter, Depends
from payrecon.api.deps import get_now, get_uow
from payrecon.api.schemas.payroll import (
    FlaggedActivityList, PayrollPeriodResponse, QuickPayRead, RedFlagResponse, WeekWindowRead,
)
from payrecon.domain.enums import PeriodSelection
from payrecon.infra.db.uow import UnitOfWork
from payrecon.services.payroll_service import PayrollService

router = APIRouter(tags=["payroll"])


@router.get("/payroll/window", response_model=WeekWindowRead)
def get_window(
    period: PeriodSelection = PeriodSelection.THIS,
    uow: UnitOfWork = Depends(get_uow),
    now: datetime | None = Depends(get_now),
) -> WeekWindowRead:
    return PayrollService(uow, now=now).get_window(period)


@router.get("/payroll", response_model=PayrollPeriodResponse)
def get_period(
    period: PeriodSelection = PeriodSelection.THIS,
    uow: UnitOfWork = Depends(get_uow),
    now: datetime | None = Depends(get_now),
) -> PayrollPeriodResponse:
    return PayrollService(uow, now=now).get_period(period)


@router.get("/payroll/flagged", response_model=FlaggedActivityList)
def list_flagged(
    period: PeriodSelection = PeriodSelection.THIS,
    uow: UnitOfWork = Depends(get_uow),
    now: datetime | None = Depends(get_now),
) -> FlaggedActivityList:
    return PayrollService(uow, now=now).list_flagged_activity(period)


@router.get("/payroll/red-flags", response_model=RedFlagResponse)
def list_red_flags(
    period: PeriodSelection = PeriodSelection.THIS,
    uow: UnitOfWork = Depends(get_uow),
    now: datetime | None = Depends(get_now),
) -> RedFlagResponse:
    return PayrollService(uow, now=now).list_red_flags(period)


@router.get("/employees/{employee_id}/quick-pay", response_model=QuickPayRead)
def quick_pay(
    employee_id: int,
    arrangement_id: int,
    period: PeriodSelection = PeriodSelection.THIS,
    uow: UnitOfWork = Depends(get_uow),
    now: datetime | None = Depends(get_now),
) -> QuickPayRead:
    return PayrollService(uow, now=now).suggest_quick_pay(employee_id, arrangement_id, period)
