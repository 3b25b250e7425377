"""Custom exceptions for the investment calculator."""

from enum import Enum
from typing import Optional


class InvestmentCalculatorError(Exception):
    """Base exception."""
    pass


class ValidationReason(str, Enum):
    MALFORMED_CURRENCY = "MalformedCurrency"
    MALFORMED_PERCENTAGE = "MalformedPercentage"
    NON_POSITIVE_RATE = "NonPositiveRate"
    MALFORMED_PERIOD = "MalformedPeriod"
    NON_POSITIVE_PERIOD = "NonPositivePeriod"
    NON_POSITIVE_CONTRIBUTION = "NonPositiveContribution"
    NEGATIVE_AMOUNT = "NegativeAmount"
    MISSING_RATE = "MissingRate"
    MISSING_FIELD = "MissingField"
    MALFORMED_PHONE = "MalformedPhone"
    TERMS_NOT_ACCEPTED = "TermsNotAccepted"


class ValidationError(InvestmentCalculatorError):
    """Malformed or out-of-range input for a single field."""

    def __init__(self, reason: ValidationReason, field: str = "", message: str = ""):
        self.reason = reason
        self.field = field
        self.message = message or reason.value
        super().__init__(f"{field}: {self.message}" if field else self.message)


class RateTableUnavailable(InvestmentCalculatorError):
    """The rate table provider failed or returned no usable entries."""

    def __init__(self, indicator: Optional[str] = None, message: str = ""):
        self.indicator = indicator
        detail = message or "no forecast rates available"
        super().__init__(f"Rate table for {indicator}: {detail}" if indicator else detail)


class ConsistencyError(InvestmentCalculatorError):
    """Net amount exceeds gross amount (or either is negative)."""
    pass


class StageError(InvestmentCalculatorError):
    """A calculation step was attempted out of order."""
    pass


class ProjectionOverflowError(InvestmentCalculatorError):
    """The projected amount is beyond what decimal arithmetic can represent."""
    pass
