from datetime import date, datetime
from typing import Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from payrecon.domain.enums import PaymentMethod, PaySchedule, TaxClassification
from payrecon.models.core import utcnow

SETTLEMENT_UNIQUE_INDEX = "ux_paymentrecord_settlement"


class PayRateArrangement(SQLModel, table=True):
    """One rate row. A rate change inserts a new row; rows are never edited."""

    id: Optional[int] = Field(default=None, primary_key=True)
    employee_id: int = Field(foreign_key="employee.id", index=True)
    rate: float
    payment_method: PaymentMethod = PaymentMethod.CASH
    pay_schedule: PaySchedule = PaySchedule.NONE
    tax_classification: TaxClassification = TaxClassification.NONE
    effective_date: date
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class PaymentRecord(SQLModel, table=True):
    """Append-only settlement ledger row.

    ``estimated_amount`` is the system's hours x rate and ``gross_amount`` is what
    the operator actually logged; both are kept for audit.
    """

    __table_args__ = (
        UniqueConstraint(
            "employee_id", "arrangement_id", "pay_period_start", "pay_period_end",
            name=SETTLEMENT_UNIQUE_INDEX,
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    employee_id: int = Field(foreign_key="employee.id", index=True)
    arrangement_id: Optional[int] = Field(default=None, foreign_key="payratearrangement.id")
    pay_period_start: date = Field(index=True)
    pay_period_end: date
    hours_worked: float
    hourly_rate: float
    estimated_amount: float
    gross_amount: float
    payment_method: PaymentMethod
    check_number: Optional[str] = None
    notes: Optional[str] = None
    prepared_date: date
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
