"""pt-BR numeric normalization for currency, percentage and period input.

Parsing functions are pure: they accept the text a user typed and return a
Decimal (or int), raising ValidationError with a field-scoped reason when the
text does not match the expected shape.

    parse_currency("1.234,56")  → Decimal("1234.56")
    parse_percentage("12,5")    → Decimal("12.5")
    parse_period("24")          → 24

parse_request() runs every field independently and collects the outcome in a
ValidationReport, so a caller can show all field errors at once before the
projection engine runs.

The format_* helpers only normalize keystrokes and render results for
display. The engine never depends on them.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any, Optional

from .exceptions import ValidationError, ValidationReason
from .models import (
    ContributionPlan,
    Duration,
    PeriodUnit,
    RatePeriodUnit,
    RateSpec,
    Regime,
    TaxPolicy,
)

CURRENCY_PATTERN = re.compile(r"^\d{1,3}(\.\d{3})*,\d{2}$")
PERCENTAGE_PATTERN = re.compile(r"^\d*(,\d{0,2})?$")
PERIOD_PATTERN = re.compile(r"^\d+$")


def _to_decimal(text: str) -> Decimal:
    """Drop '.' grouping and turn the ',' decimal separator into '.'."""
    normalized = text.replace(".", "").replace(",", ".")
    if normalized in ("", "."):
        return Decimal("0")
    return Decimal(normalized)


def parse_currency(text: str, field: str = "amount", require_positive: bool = False) -> Decimal:
    """Parse a pt-BR currency amount such as "1.234,56".

    Exactly two decimal digits are required and thousands must be grouped
    with '.'. Use require_positive for amounts that must be above zero
    (the monthly contribution).
    """
    text = text or ""
    if not CURRENCY_PATTERN.match(text):
        raise ValidationError(
            ValidationReason.MALFORMED_CURRENCY, field,
            "Invalid format. Use R$ 0,00",
        )
    value = _to_decimal(text)
    if require_positive and value <= 0:
        raise ValidationError(
            ValidationReason.NON_POSITIVE_CONTRIBUTION, field,
            "Amount must be greater than zero",
        )
    return value


def parse_percentage(text: str, field: str = "rate", require_positive: bool = True) -> Decimal:
    """Parse a percentage such as "12,5" (→ 12.5) with up to two decimals."""
    text = text or ""
    if not PERCENTAGE_PATTERN.match(text):
        raise ValidationError(
            ValidationReason.MALFORMED_PERCENTAGE, field,
            "Rate must be a number and may contain one comma",
        )
    try:
        value = _to_decimal(text)
    except InvalidOperation:
        raise ValidationError(ValidationReason.MALFORMED_PERCENTAGE, field)
    if require_positive and value <= 0:
        raise ValidationError(
            ValidationReason.NON_POSITIVE_RATE, field,
            "Rate must be greater than zero",
        )
    return value


def parse_period(text: str, field: str = "period") -> int:
    text = text or ""
    if not PERIOD_PATTERN.match(text):
        raise ValidationError(
            ValidationReason.MALFORMED_PERIOD, field,
            "Period must be a positive whole number",
        )
    value = int(text)
    if value == 0:
        raise ValidationError(
            ValidationReason.NON_POSITIVE_PERIOD, field,
            "Period must be greater than zero",
        )
    return value


# ---------------------------------------------------------------------------
# Aggregate validation
# ---------------------------------------------------------------------------

@dataclass
class FieldResult:
    field: str
    ok: bool
    value: Any = None
    error: Optional[ValidationError] = None


@dataclass
class ValidationReport:
    """Per-field outcome of validating one calculation request."""
    results: dict[str, FieldResult] = field(default_factory=dict)
    regime: Regime = Regime.FIXED
    rate_period_unit: RatePeriodUnit = RatePeriodUnit.ANNUAL
    period_unit: PeriodUnit = PeriodUnit.MONTH
    exempt: bool = False

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results.values())

    @property
    def errors(self) -> list[ValidationError]:
        return [r.error for r in self.results.values() if r.error is not None]

    def value(self, name: str) -> Any:
        return self.results[name].value if name in self.results else None

    def raise_for_errors(self) -> None:
        errors = self.errors
        if errors:
            raise errors[0]

    def entities(self) -> tuple[ContributionPlan, RateSpec, Duration, TaxPolicy]:
        """Build the engine inputs. Raises the first field error if any."""
        self.raise_for_errors()
        plan = ContributionPlan(
            initial_deposit=self.value("initial_deposit"),
            monthly_contribution=self.value("monthly_contribution"),
        )
        rate_spec = RateSpec(
            regime=self.regime,
            nominal_rate=self.value("rate"),
            rate_period_unit=self.rate_period_unit,
        )
        duration = Duration(period_count=self.value("period"), period_unit=self.period_unit)
        return plan, rate_spec, duration, TaxPolicy(exempt=self.exempt)


def _check(report: ValidationReport, name: str, parser, *args, **kwargs) -> None:
    try:
        report.results[name] = FieldResult(name, True, parser(*args, field=name, **kwargs))
    except ValidationError as e:
        report.results[name] = FieldResult(name, False, error=e)


def parse_request(
    initial_deposit: str,
    monthly_contribution: str,
    period: str,
    regime: Regime = Regime.FIXED,
    rate: Optional[str] = None,
    rate_period_unit: RatePeriodUnit = RatePeriodUnit.ANNUAL,
    period_unit: PeriodUnit = PeriodUnit.MONTH,
    exempt: bool = False,
) -> ValidationReport:
    """Validate raw form text for one calculation.

    The rate is not read for the benchmark-indexed regime. Every other field
    is validated even when an earlier one fails.
    """
    report = ValidationReport(
        regime=regime,
        rate_period_unit=rate_period_unit,
        period_unit=period_unit,
        exempt=exempt,
    )
    _check(report, "initial_deposit", parse_currency, initial_deposit)
    _check(report, "monthly_contribution", parse_currency, monthly_contribution, require_positive=True)
    if regime != Regime.BENCHMARK_INDEXED:
        _check(report, "rate", parse_percentage, rate)
    _check(report, "period", parse_period, period)
    return report


# ---------------------------------------------------------------------------
# Presentation helpers
# ---------------------------------------------------------------------------

def _group_ptbr(value: Decimal) -> str:
    # 1,234.56 → 1.234,56
    return f"{value:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")


def format_money(keystrokes: str) -> str:
    """Normalize typed digits into a currency string: "123456" → "1.234,56"."""
    digits = re.sub(r"\D", "", keystrokes or "")
    if not digits:
        return ""
    return _group_ptbr(Decimal(digits) / 100)


def format_rate_percent(keystrokes: str) -> str:
    """Keep digits and single commas, never a leading comma."""
    value = re.sub(r"[^\d,]", "", keystrokes or "")
    value = re.sub(r",{2,}", ",", value)
    return re.sub(r"^,", "", value)


def format_brl(amount: Decimal) -> str:
    """Render an amount as Brazilian reais, e.g. R$ 2.395,08."""
    with localcontext() as ctx:
        # room for every integer digit plus the cents
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        rounded = amount.quantize(Decimal("0.01"))
        sign = "-" if rounded < 0 else ""
        return f"{sign}R$ {_group_ptbr(abs(rounded))}"
