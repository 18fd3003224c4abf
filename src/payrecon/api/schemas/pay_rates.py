"""Pay-rate DTOs: pure Pydantic, zero ORM imports."""
from __future__ import annotations
from datetime import date
from pydantic import BaseModel, Field
from payrecon.domain.enums import PaymentMethod, PaySchedule, TaxClassification


class PayRateCreate(BaseModel):
    rate: float = Field(gt=0)
    payment_method: PaymentMethod = PaymentMethod.CASH
    pay_schedule: PaySchedule = PaySchedule.NONE
    tax_classification: TaxClassification = TaxClassification.NONE
    effective_date: date | None = None


class PayRateRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    employee_id: int
    rate: float
    payment_method: PaymentMethod
    pay_schedule: PaySchedule
    tax_classification: TaxClassification
    effective_date: date


class PayRateList(BaseModel):
    items: list[PayRateRead]
    total: int
