"""Tests for core.projection.regimes.

Closed-form reference values (P = initial deposit, C = monthly contribution):
  fixed:   P·(1+r)^n + C·((1+r)^n − 1)/r
  indexed: with a flat table the loop equals
           P·(1+e)^n + C·(1+e)·((1+e)^n − 1)/e,   e = (1+real)(1+index) − 1
"""

from datetime import date
from decimal import Decimal

import pytest

from investment_calculator.core.exceptions import RateTableUnavailable
from investment_calculator.core.models import ContributionPlan
from investment_calculator.core.projection.regimes import (
    fixed_gross,
    indexed_gross,
    rate_for_year,
    year_after_months,
)

TOLERANCE = Decimal("0.0000001")


def _plan(initial="1000", monthly="100"):
    return ContributionPlan(Decimal(initial), Decimal(monthly))


def _annuity_due(plan, e, n):
    growth = (1 + e) ** n
    return plan.initial_deposit * growth + plan.monthly_contribution * (1 + e) * (growth - 1) / e


class TestFixedGross:
    def test_reference_scenario(self):
        # r = 12% / 12 = 1%, n = 12 → 2395.0753...
        gross = fixed_gross(_plan(), Decimal("0.01"), 12)
        assert abs(gross - Decimal("2395.08")) <= Decimal("0.01")

    def test_zero_rate_is_exact(self):
        gross = fixed_gross(_plan("1234.56", "78.90"), Decimal("0"), 37)
        assert gross == Decimal("1234.56") + Decimal("78.90") * 37

    def test_single_month(self):
        # 1000·1.01 + 100 = 1110
        assert fixed_gross(_plan(), Decimal("0.01"), 1) == Decimal("1110.00")

    def test_deterministic(self):
        first = fixed_gross(_plan(), Decimal("0.0085"), 240)
        assert all(fixed_gross(_plan(), Decimal("0.0085"), 240) == first for _ in range(5))


class TestFixedMonotonicity:
    r = Decimal("0.01")

    def test_increases_with_initial_deposit(self):
        assert fixed_gross(_plan("1001"), self.r, 24) > fixed_gross(_plan("1000"), self.r, 24)

    def test_increases_with_contribution(self):
        assert fixed_gross(_plan(monthly="101"), self.r, 24) > fixed_gross(_plan(), self.r, 24)

    def test_increases_with_months(self):
        assert fixed_gross(_plan(), self.r, 25) > fixed_gross(_plan(), self.r, 24)

    def test_increases_with_rate(self):
        assert fixed_gross(_plan(), Decimal("0.011"), 24) > fixed_gross(_plan(), self.r, 24)


class TestYearAfterMonths:
    @pytest.mark.parametrize("start,months,expected", [
        (date(2026, 1, 31), 11, 2026),
        (date(2026, 1, 31), 12, 2027),
        (date(2026, 12, 1), 1, 2027),
        (date(2026, 10, 19), 2, 2026),
        (date(2026, 10, 19), 3, 2027),
        (date(2026, 6, 15), 30, 2028),
    ])
    def test_year(self, start, months, expected):
        assert year_after_months(start, months) == expected


class TestRateForYear:
    table = {2026: Decimal("4.5"), 2027: Decimal("4.0"), 2028: Decimal("3.5")}

    def test_exact_year(self):
        assert rate_for_year(self.table, 2027) == Decimal("4.0")

    def test_falls_back_to_latest_year(self):
        assert rate_for_year(self.table, 2035) == Decimal("3.5")

    def test_empty_table(self):
        with pytest.raises(RateTableUnavailable):
            rate_for_year({}, 2026)


class TestIndexedGross:
    def test_flat_index_without_spread(self):
        table = {year: Decimal("12") for year in range(2026, 2030)}
        gross, invested = indexed_gross(_plan(), table, 12, today=date(2026, 1, 10))
        expected = _annuity_due(_plan(), Decimal("0.01"), 12)
        assert abs(gross - expected) < TOLERANCE
        assert invested == Decimal("2200")

    def test_flat_index_with_real_spread(self):
        # e = 1.005 × 1.01 − 1 = 0.01505
        table = {year: Decimal("12") for year in range(2026, 2030)}
        gross, _ = indexed_gross(
            _plan(), table, 24, real_monthly_rate=Decimal("0.005"), today=date(2026, 3, 1)
        )
        expected = _annuity_due(_plan(), Decimal("0.01505"), 24)
        assert abs(gross - expected) < TOLERANCE

    def test_first_month_uses_next_month_year(self):
        # Starting in December, month 1 already falls in 2027; the 2026 rate is never used.
        # Months in 2028 fall back to the 2027 forecast.
        table = {2026: Decimal("0"), 2027: Decimal("12")}
        gross, _ = indexed_gross(_plan(), table, 24, today=date(2026, 12, 15))
        expected = _annuity_due(_plan(), Decimal("0.01"), 24)
        assert abs(gross - expected) < TOLERANCE

    def test_year_specific_rates(self):
        # 2 months at 12% (Nov, Dec 2026), then 1 month at 0% (Jan 2027)
        table = {2026: Decimal("12"), 2027: Decimal("0")}
        gross, _ = indexed_gross(_plan("0", "100"), table, 3, today=date(2026, 10, 5))
        # (100·1.01 + 100)·1.01 = 203.01; + 100 at 0% = 303.01
        assert gross == Decimal("303.0100")

    def test_zero_index_equals_contributions(self):
        table = {2026: Decimal("0")}
        gross, invested = indexed_gross(_plan(), table, 10, today=date(2026, 1, 1))
        assert gross == invested == Decimal("2000")

    def test_empty_table(self):
        with pytest.raises(RateTableUnavailable):
            indexed_gross(_plan(), {}, 12, today=date(2026, 1, 1))
