"""Flat income-tax withholding on investment gains.

A single 15% rate is withheld from the realized gain at maturity. The
principal (initial deposit plus contributions) is never taxed. Exempt
products (e.g. LCI/LCA, incentivized debentures) keep the full gross amount.

The regressive table that applies to most Brazilian fixed-income products
(22.5% → 15% by holding period) is deliberately not modeled: projections
assume the lowest bracket.

A loss is never taxed: the taxable base is max(gain, 0), so the net amount
can never exceed the gross amount.
"""

from decimal import Decimal
from typing import Optional

from ..models import TaxInfo

#: Flat withholding rate on realized gains
WITHHOLDING_RATE = Decimal("0.15")


def taxable_gain(gain: Decimal, exempt: bool = False) -> Decimal:
    if exempt:
        return Decimal("0")
    return max(gain, Decimal("0"))


def apply_tax(
    gross_amount: Decimal,
    gain: Decimal,
    exempt: bool,
    rate: Decimal = WITHHOLDING_RATE,
) -> Decimal:
    """Return the net amount after withholding.

    Args:
        gross_amount: Accumulated balance at maturity.
        gain: gross_amount minus everything invested. May be negative.
        exempt: True for tax-exempt products.
        rate: Withholding rate as a fraction.

    Returns:
        gross_amount when exempt, otherwise gross_amount − max(gain, 0) × rate.
    """
    if exempt:
        return gross_amount
    return gross_amount - taxable_gain(gain) * rate


def calculate_withholding(
    gross_amount: Decimal,
    gain: Decimal,
    exempt: bool,
    rate: Optional[Decimal] = None,
) -> TaxInfo:
    """Same as apply_tax, keeping every intermediate value."""
    if rate is None:
        rate = get_withholding_rate()
    base = taxable_gain(gain, exempt)
    withholding = base * rate
    return TaxInfo(
        gross_amount=gross_amount,
        gain=gain,
        taxable_gain=base,
        withholding=withholding,
        net_amount=gross_amount - withholding,
    )


def get_withholding_rate() -> Decimal:
    """Read the configured withholding rate from config.json (default 15%)."""
    from ..config import get_config
    return get_config().withholding_rate
