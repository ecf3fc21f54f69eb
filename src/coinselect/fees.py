"""
Fee and effective value calculations shared by all selection algorithms.
"""

from __future__ import annotations

from decimal import ROUND_CEILING, Decimal

from coinselect.models import OutputGroup


def calculate_fee(weight: int, feerate: float) -> int:
    """
    Calculate the fee for a given weight at a given feerate.

    The product is computed in Decimal so large weights or feerates cannot lose precision,
    and is rounded up to whole sats.

    Args:
        weight: Weight units
        feerate: Sats per weight unit

    Returns:
        Fee in satoshis
    """
    fee = Decimal(weight) * Decimal(str(feerate))
    return int(fee.to_integral_value(rounding=ROUND_CEILING))


def effective_value(output: OutputGroup, feerate: float) -> int:
    """
    Value of a group minus the fee for spending it, floored at zero.

    Args:
        output: Candidate output group
        feerate: Sats per weight unit

    Returns:
        Effective value in satoshis
    """
    return max(0, output.value - calculate_fee(output.weight, feerate))
