from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from payrecon.domain.validation import ValidationResult


class PayrollError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(PayrollError):
    """Requested resource does not exist."""


class ConflictError(PayrollError):
    """Operation conflicts with existing state (e.g. a settlement already committed)."""


class PayrollLoadError(PayrollError):
    """Source data for a period could not be loaded; the period is not computed at all."""


class ValidationFailed(PayrollError):
    """Input rejected by a validation helper."""

    def __init__(self, result: "ValidationResult") -> None:
        self.result = result
        super().__init__(result.error_message or "Invalid input")
