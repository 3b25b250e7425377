"""Gross-amount calculations for each interest regime.

All functions are pure: they accept Decimal values and return Decimal
values. The indexed loop receives an already fetched rate table; no I/O
happens here.

Fixed (closed form, monthly rate r over n months):
    gross = P·(1+r)^n + C·((1+r)^n − 1)/r       r > 0
    gross = P + C·n                              r = 0

Indexed (month by month, i = 1..n):
    index   = table[year(today + i months)] / 100 / 12
    eff     = (1 + real)·(1 + index) − 1
    balance = (balance + C)·(1 + eff)
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from loguru import logger

from ..exceptions import RateTableUnavailable
from ..models import MONTHS_PER_YEAR, ContributionPlan, RateTable

ONE = Decimal("1")


def fixed_gross(plan: ContributionPlan, monthly_rate: Decimal, months: int) -> Decimal:
    """Future value of the deposit plus an ordinary annuity of contributions."""
    if monthly_rate == 0:
        return plan.initial_deposit + plan.monthly_contribution * months
    growth = (ONE + monthly_rate) ** months
    return (
        plan.initial_deposit * growth
        + plan.monthly_contribution * ((growth - ONE) / monthly_rate)
    )


def year_after_months(start: date, months: int) -> int:
    """Calendar year of start shifted forward by a number of months."""
    return start.year + (start.month - 1 + months) // MONTHS_PER_YEAR


def rate_for_year(table: RateTable, year: int) -> Decimal:
    """Forecast for year, or the latest forecast in the table when year is past its end."""
    if not table:
        raise RateTableUnavailable(message="rate table is empty")
    rate = table.get(year)
    if rate is None:
        last_year = max(table)
        logger.debug(f"No forecast for {year}; extrapolating {last_year} rate {table[last_year]}%")
        rate = table[last_year]
    return rate


def indexed_gross(
    plan: ContributionPlan,
    table: RateTable,
    months: int,
    real_monthly_rate: Decimal = Decimal("0"),
    today: Optional[date] = None,
) -> tuple[Decimal, Decimal]:
    """Simulate monthly compounding on an index plus a fixed real spread.

    Contributions are added at the start of each month and earn that
    month's effective rate.

    Args:
        plan: Initial deposit and monthly contribution.
        table: Year → annual index forecast in percent.
        months: Number of months to simulate (≥ 1).
        real_monthly_rate: Fixed spread over the index as a monthly fraction.
            Zero for benchmark-indexed products.
        today: Simulation start date (defaults to today).

    Returns:
        Tuple of (gross_amount, total_invested).
    """
    if not table:
        raise RateTableUnavailable(message="rate table is empty")
    start = today or date.today()

    balance = plan.initial_deposit
    total_invested = plan.initial_deposit
    for i in range(1, months + 1):
        annual_rate = rate_for_year(table, year_after_months(start, i))
        monthly_index = annual_rate / 100 / MONTHS_PER_YEAR
        effective = (ONE + real_monthly_rate) * (ONE + monthly_index) - ONE
        balance = (balance + plan.monthly_contribution) * (ONE + effective)
        total_invested += plan.monthly_contribution
    return balance, total_invested
