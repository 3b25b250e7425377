"""Tests for core.models invariants and derived values."""

from decimal import Decimal

import pytest

from investment_calculator.core.exceptions import ValidationError, ValidationReason
from investment_calculator.core.models import (
    ContributionPlan,
    Duration,
    PeriodUnit,
    ProjectionResult,
    RatePeriodUnit,
    RateSpec,
    Regime,
)


class TestContributionPlan:
    def test_total_invested(self):
        plan = ContributionPlan(Decimal("1000"), Decimal("100"))
        assert plan.total_invested(12) == Decimal("2200")

    def test_zero_initial_deposit_allowed(self):
        plan = ContributionPlan(Decimal("0"), Decimal("1"))
        assert plan.initial_deposit == Decimal("0")

    def test_monthly_contribution_must_be_positive(self):
        with pytest.raises(ValidationError) as exc:
            ContributionPlan(Decimal("1000"), Decimal("0"))
        assert exc.value.reason == ValidationReason.NON_POSITIVE_CONTRIBUTION

    def test_negative_initial_deposit(self):
        with pytest.raises(ValidationError) as exc:
            ContributionPlan(Decimal("-1"), Decimal("10"))
        assert exc.value.reason == ValidationReason.NEGATIVE_AMOUNT


class TestRateSpec:
    def test_annual_rate_is_divided_by_twelve(self):
        spec = RateSpec(Regime.FIXED, Decimal("12"), RatePeriodUnit.ANNUAL)
        assert spec.monthly_rate == Decimal("0.01")

    def test_monthly_rate(self):
        spec = RateSpec(Regime.FIXED, Decimal("1"), RatePeriodUnit.MONTHLY)
        assert spec.monthly_rate == Decimal("0.01")

    def test_inflation_spread(self):
        spec = RateSpec(Regime.INFLATION_INDEXED, Decimal("6"), RatePeriodUnit.ANNUAL)
        assert spec.monthly_rate == Decimal("0.005")

    def test_benchmark_ignores_rate(self):
        spec = RateSpec(Regime.BENCHMARK_INDEXED, Decimal("110"))
        assert spec.monthly_rate == Decimal("0")

    def test_benchmark_without_rate(self):
        assert RateSpec(Regime.BENCHMARK_INDEXED).monthly_rate == Decimal("0")

    def test_fixed_requires_rate(self):
        with pytest.raises(ValidationError) as exc:
            RateSpec(Regime.FIXED)
        assert exc.value.reason == ValidationReason.MISSING_RATE

    def test_negative_rate_rejected(self):
        with pytest.raises(ValidationError):
            RateSpec(Regime.INFLATION_INDEXED, Decimal("-1"))

    def test_zero_rate_representable(self):
        assert RateSpec(Regime.FIXED, Decimal("0")).monthly_rate == Decimal("0")


class TestDuration:
    def test_years(self):
        assert Duration(2, PeriodUnit.YEAR).total_months == 24

    def test_months(self):
        assert Duration(7, PeriodUnit.MONTH).total_months == 7

    def test_zero_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Duration(0, PeriodUnit.YEAR)
        assert exc.value.reason == ValidationReason.NON_POSITIVE_PERIOD


class TestProjectionResult:
    def test_tax_is_difference(self):
        result = ProjectionResult(Decimal("2000"), Decimal("1850"))
        assert result.tax == Decimal("150")
