"""Investment projection calculations.

Usage:
    from investment_calculator.core.projection import project

    result = project(plan, rate_spec, duration, tax_policy)
    result.gross_amount, result.net_amount
"""

from .engine import REGIME_INDICATORS, ProjectionEngine, project
from .regimes import fixed_gross, indexed_gross, rate_for_year, year_after_months
from .result import aggregate

__all__ = [
    "project",
    "ProjectionEngine",
    "REGIME_INDICATORS",
    "fixed_gross",
    "indexed_gross",
    "rate_for_year",
    "year_after_months",
    "aggregate",
]
