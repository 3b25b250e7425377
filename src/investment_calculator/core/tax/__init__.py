"""Withholding tax on projected investment gains.

High-level entry point:
    from investment_calculator.core.tax import apply_tax

    net = apply_tax(gross_amount, gain, exempt=False)   # gross − 15% of gain
"""

from .withholding import (
    WITHHOLDING_RATE,
    apply_tax,
    calculate_withholding,
    get_withholding_rate,
    taxable_gain,
)

__all__ = [
    "WITHHOLDING_RATE",
    "apply_tax",
    "calculate_withholding",
    "get_withholding_rate",
    "taxable_gain",
]
