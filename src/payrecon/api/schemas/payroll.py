"""Payroll period DTOs: pure Pydantic, zero ORM imports."""
from __future__ import annotations
from datetime import date
from pydantic import BaseModel
from payrecon.domain.enums import (
    PaymentMethod, PaymentStatus, PaySchedule, PeriodSelection, TaxClassification,
)
from payrecon.api.schemas.pay_rates import PayRateRead
from payrecon.api.schemas.timeclock import WorkedShiftRead


class WeekWindowRead(BaseModel):
    selection: PeriodSelection
    start: date
    end: date
    display_end: date


class AllocationRead(BaseModel):
    arrangement_id: int
    pay_schedule: PaySchedule
    tax_classification: TaxClassification
    hours: float
    rate: float
    amount: float
    status: PaymentStatus
    paid_hours: float | None = None
    paid_amount: float | None = None


class QuickPayRead(BaseModel):
    arrangement_id: int
    hours: float
    rate: float
    estimated_amount: float
    suggested_amount: int
    payment_method: PaymentMethod


class EmployeePayrollSummary(BaseModel):
    employee_id: int
    name: str
    role: str
    total_hours: float
    has_incomplete_shifts: bool
    worked_shifts: list[WorkedShiftRead]
    arrangements: list[PayRateRead]
    allocations: list[AllocationRead]
    quick_pay: list[QuickPayRead]
    status: PaymentStatus
    paid_arrangements: int
    total_pay: float
    paid_amount: float
    last_payment_method: PaymentMethod | None = None


class FlaggedActivity(BaseModel):
    employee_id: int
    employee_name: str
    date: date
    day_name: str
    clock_in: str
    clock_out: str
    hours_worked: float
    reason: str


class FlaggedActivityList(BaseModel):
    window: WeekWindowRead
    items: list[FlaggedActivity]
    total: int


class PayrollPeriodResponse(BaseModel):
    window: WeekWindowRead
    employees: list[EmployeePayrollSummary]
    flagged_activity: list[FlaggedActivity]
    total_hours: float
    total_payroll: float
    paid_count: int


class RedFlagEmployee(BaseModel):
    employee_id: int
    name: str
    shifts: list[WorkedShiftRead]
    flagged_hours: float
    average_shift_hours: float


class RedFlagResponse(BaseModel):
    window: WeekWindowRead
    employees: list[RedFlagEmployee]
    total_flagged_shifts: int
