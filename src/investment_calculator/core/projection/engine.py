"""Projection engine — dispatches a calculation to its interest regime."""

from datetime import date
from decimal import Decimal, InvalidOperation, Overflow
from typing import Optional

from loguru import logger

from ...external.rate_table import FocusRateTableProvider, Indicator, RateTableProvider
from ..exceptions import ProjectionOverflowError
from ..models import (
    ContributionPlan,
    Duration,
    ProjectionResult,
    RateSpec,
    Regime,
    TaxPolicy,
)
from ..tax import apply_tax, get_withholding_rate
from .regimes import fixed_gross, indexed_gross
from .result import aggregate

REGIME_INDICATORS: dict[Regime, Indicator] = {
    Regime.INFLATION_INDEXED: Indicator.INFLATION,
    Regime.BENCHMARK_INDEXED: Indicator.BENCHMARK,
}


class ProjectionEngine:
    """Computes gross and net values of an investment plan.

    The rate table provider is only consulted for indexed regimes, once per
    calculation and before the monthly simulation starts. Nothing is cached
    between calculations. Without an explicit provider, the BCB Focus
    provider is built per calculation with the same reference date as the
    simulation, so past-year filtering and the first simulated month agree.
    """

    def __init__(
        self,
        provider: Optional[RateTableProvider] = None,
        withholding_rate: Optional[Decimal] = None,
    ):
        self._provider = provider
        self.withholding_rate = withholding_rate

    def provider_for(self, today: Optional[date] = None) -> RateTableProvider:
        if self._provider is not None:
            return self._provider
        return FocusRateTableProvider(today=today)

    def gross(
        self,
        plan: ContributionPlan,
        rate_spec: RateSpec,
        duration: Duration,
        today: Optional[date] = None,
    ) -> tuple[Decimal, Decimal]:
        """Return (gross_amount, total_invested) for the selected regime."""
        months = duration.total_months
        if rate_spec.regime == Regime.FIXED:
            return (
                fixed_gross(plan, rate_spec.monthly_rate, months),
                plan.total_invested(months),
            )

        indicator = REGIME_INDICATORS[rate_spec.regime]
        table = self.provider_for(today).fetch_rate_table(indicator)
        # monthly_rate is zero for the benchmark regime: no real spread
        return indexed_gross(
            plan,
            table,
            months,
            real_monthly_rate=rate_spec.monthly_rate,
            today=today,
        )

    def project(
        self,
        plan: ContributionPlan,
        rate_spec: RateSpec,
        duration: Duration,
        tax_policy: TaxPolicy,
        today: Optional[date] = None,
    ) -> ProjectionResult:
        """Project the plan to maturity.

        Raises:
            RateTableUnavailable: the forecast for an indexed regime could not
                be fetched. No partial result is produced.
            ProjectionOverflowError: the amounts grew past the decimal limits.
            ConsistencyError: net exceeded gross.
        """
        logger.debug(
            f"Projecting {rate_spec.regime.value} regime over {duration.total_months} months"
        )
        try:
            gross_amount, total_invested = self.gross(plan, rate_spec, duration, today=today)
            gain = gross_amount - total_invested

            rate = self.withholding_rate
            if rate is None:
                rate = get_withholding_rate()
            net_amount = apply_tax(gross_amount, gain, tax_policy.exempt, rate=rate)
        except (Overflow, InvalidOperation) as e:
            logger.warning(f"Projection over {duration.total_months} months overflowed: {e!r}")
            raise ProjectionOverflowError(
                f"Projection over {duration.total_months} months is too large to compute"
            ) from e
        return aggregate(gross_amount, net_amount, total_invested=total_invested, gain=gain)


def project(
    plan: ContributionPlan,
    rate_spec: RateSpec,
    duration: Duration,
    tax_policy: TaxPolicy,
    provider: Optional[RateTableProvider] = None,
    today: Optional[date] = None,
) -> ProjectionResult:
    """Module-level shortcut for ProjectionEngine(provider).project(...)."""
    return ProjectionEngine(provider).project(plan, rate_spec, duration, tax_policy, today=today)
