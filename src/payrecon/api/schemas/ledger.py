"""Payment ledger DTOs: pure Pydantic, zero ORM imports."""
from __future__ import annotations
from datetime import date, datetime
from pydantic import BaseModel, Field
from payrecon.domain.enums import PaymentMethod, PaymentStatus


class PaymentCommitRequest(BaseModel):
    employee_id: int
    arrangement_id: int
    pay_period_start: date
    pay_period_end: date
    hours_worked: float = Field(ge=0)
    hourly_rate: float = Field(ge=0)
    gross_amount: float
    payment_method: PaymentMethod
    check_number: str | None = None
    notes: str | None = None


class PaymentRecordRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    employee_id: int
    arrangement_id: int | None = None
    pay_period_start: date
    pay_period_end: date
    hours_worked: float
    hourly_rate: float
    estimated_amount: float
    gross_amount: float
    payment_method: PaymentMethod
    check_number: str | None = None
    notes: str | None = None
    prepared_date: date
    created_at: datetime | None = None


class PaymentRecordList(BaseModel):
    items: list[PaymentRecordRead]
    total: int


class SettlementStatusRead(BaseModel):
    employee_id: int
    arrangement_id: int
    pay_period_start: date
    pay_period_end: date
    status: PaymentStatus
    record_id: int | None = None
