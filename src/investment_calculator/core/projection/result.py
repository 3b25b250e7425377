"""Packaging of gross/net amounts into a ProjectionResult."""

from decimal import Decimal
from typing import Optional

from ..exceptions import ConsistencyError
from ..models import ProjectionResult


def aggregate(
    gross_amount: Decimal,
    net_amount: Decimal,
    total_invested: Optional[Decimal] = None,
    gain: Optional[Decimal] = None,
) -> ProjectionResult:
    """Build the result, enforcing 0 ≤ net ≤ gross.

    Raises:
        ConsistencyError: a regime or tax computation produced net > gross
            or a negative amount.
    """
    if gross_amount < 0 or net_amount < 0:
        raise ConsistencyError(
            f"Negative projection amount (gross={gross_amount}, net={net_amount})"
        )
    if net_amount > gross_amount:
        raise ConsistencyError(
            f"Net amount {net_amount} exceeds gross amount {gross_amount}"
        )
    return ProjectionResult(
        gross_amount=gross_amount,
        net_amount=net_amount,
        total_invested=total_invested,
        gain=gain,
    )
