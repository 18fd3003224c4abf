"""Closed vocabularies shared by the engine, the ORM models and the DTOs."""
from __future__ import annotations
from enum import Enum


class ClockEventType(str, Enum):
    IN = "in"
    OUT = "out"


class PaySchedule(str, Enum):
    WEEKLY = "Weekly"
    BIWEEKLY = "Biweekly"
    NONE = "None"


class TaxClassification(str, Enum):
    W2 = "W-2"
    CONTRACTOR_1099 = "1099"
    NONE = "None"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CHECK = "check"


class PeriodSelection(str, Enum):
    THIS = "this"
    LAST = "last"
    LAST_PAY_PERIOD = "lastPayPeriod"


class PaymentStatus(str, Enum):
    PAID = "paid"
    PARTIAL = "partial"
    UNPAID = "unpaid"
