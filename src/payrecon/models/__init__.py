"""ORM table models. Importing this package registers every mapper."""
from payrecon.models.core import Employee
from payrecon.models.timeclock import ClockEvent
from payrecon.models.pay import PayRateArrangement, PaymentRecord

__all__ = ["Employee", "ClockEvent", "PayRateArrangement", "PaymentRecord"]
