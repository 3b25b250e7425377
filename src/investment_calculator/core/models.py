"""Data models for the investment calculator."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from .exceptions import ValidationError, ValidationReason

MONTHS_PER_YEAR = 12

#: Year → average annual forecast rate in percent (e.g. {2026: Decimal("4.5")}).
RateTable = dict[int, Decimal]


class Regime(str, Enum):
    FIXED = "fixed"
    INFLATION_INDEXED = "ipca"
    BENCHMARK_INDEXED = "cdi"


class RatePeriodUnit(str, Enum):
    MONTHLY = "monthly"
    ANNUAL = "annual"


class PeriodUnit(str, Enum):
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class ContributionPlan:
    initial_deposit: Decimal
    monthly_contribution: Decimal

    def __post_init__(self):
        if self.initial_deposit < 0:
            raise ValidationError(
                ValidationReason.NEGATIVE_AMOUNT, "initial_deposit",
                "Initial deposit cannot be negative",
            )
        if self.monthly_contribution <= 0:
            raise ValidationError(
                ValidationReason.NON_POSITIVE_CONTRIBUTION, "monthly_contribution",
                "Monthly contribution must be greater than zero",
            )

    def total_invested(self, months: int) -> Decimal:
        return self.initial_deposit + self.monthly_contribution * months


@dataclass(frozen=True)
class RateSpec:
    """Interest regime plus the user's contractual rate.

    nominal_rate is a percentage (12 means 12%). It is the whole rate for
    FIXED, the real spread over inflation for INFLATION_INDEXED, and ignored
    for BENCHMARK_INDEXED.
    """
    regime: Regime
    nominal_rate: Optional[Decimal] = None
    rate_period_unit: RatePeriodUnit = RatePeriodUnit.ANNUAL

    def __post_init__(self):
        if self.regime == Regime.BENCHMARK_INDEXED:
            return
        if self.nominal_rate is None:
            raise ValidationError(
                ValidationReason.MISSING_RATE, "nominal_rate",
                f"A rate is required for the {self.regime.value} regime",
            )
        if self.nominal_rate < 0:
            raise ValidationError(
                ValidationReason.NON_POSITIVE_RATE, "nominal_rate",
                "Rate cannot be negative",
            )

    @property
    def monthly_rate(self) -> Decimal:
        """Rate per month as a fraction (12% annual → 0.01)."""
        if self.regime == Regime.BENCHMARK_INDEXED or self.nominal_rate is None:
            return Decimal("0")
        if self.rate_period_unit == RatePeriodUnit.ANNUAL:
            return self.nominal_rate / 100 / MONTHS_PER_YEAR
        return self.nominal_rate / 100


@dataclass(frozen=True)
class Duration:
    period_count: int
    period_unit: PeriodUnit = PeriodUnit.MONTH

    def __post_init__(self):
        if self.total_months < 1:
            raise ValidationError(
                ValidationReason.NON_POSITIVE_PERIOD, "period_count",
                "Period must be greater than zero",
            )

    @property
    def total_months(self) -> int:
        if self.period_unit == PeriodUnit.YEAR:
            return self.period_count * MONTHS_PER_YEAR
        return self.period_count


@dataclass(frozen=True)
class TaxPolicy:
    exempt: bool = False


@dataclass(frozen=True)
class ForecastRecord:
    """One published market forecast for an indicator and reference year."""
    indicator: str
    reference_year: int
    observation_date: date
    average_rate: Decimal


@dataclass
class TaxInfo:
    """Withholding calculation results."""
    gross_amount: Decimal = Decimal("0")
    gain: Decimal = Decimal("0")
    taxable_gain: Decimal = Decimal("0")  # max(gain, 0), or 0 when exempt
    withholding: Decimal = Decimal("0")
    net_amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class ProjectionResult:
    gross_amount: Decimal
    net_amount: Decimal
    total_invested: Optional[Decimal] = None
    gain: Optional[Decimal] = None

    @property
    def tax(self) -> Decimal:
        return self.gross_amount - self.net_amount
