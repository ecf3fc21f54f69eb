"""
Waste metric used to compare selections produced by different algorithms.

waste = weight * (target feerate - long term feerate) + cost of change or excess

The first term is the opportunity cost of spending the selected inputs now instead of at the
long-term feerate. The second term is either the cost of creating and later spending a change
output (drain), or the surplus that is given away when no change output is made.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_CEILING, Decimal

from coinselect.fees import calculate_fee
from coinselect.models import CoinSelectionOptions, ExcessStrategy, OutputGroup, WasteMetric


def calculate_waste(
    inputs: Sequence[OutputGroup],
    selected_inputs: Sequence[int],
    options: CoinSelectionOptions,
    accumulated_value: int,
    accumulated_weight: int,
    estimated_fee: int,
) -> WasteMetric:
    """
    Calculate the waste of a finished selection.

    Args:
        inputs: Full candidate list
        selected_inputs: Indices of the selected candidates
        options: Selection options
        accumulated_value: Sum of the selected candidates' values
        accumulated_weight: Sum of the selected candidates' weights
        estimated_fee: Fee paid by the selection

    Returns:
        Non-negative waste score
    """
    waste = 0

    if options.long_term_feerate is not None:
        spread = Decimal(str(options.target_feerate)) - Decimal(str(options.long_term_feerate))
        timing_cost = int((Decimal(accumulated_weight) * spread).to_integral_value(ROUND_CEILING))
        # A low current feerate makes spending now cheaper, but never below the change term
        waste += max(0, timing_cost)

    if options.excess_strategy != ExcessStrategy.TO_DRAIN:
        # No change output, so the whole surplus is lost
        waste += max(0, accumulated_value - options.target_value - estimated_fee)
    else:
        waste += options.drain_cost

    return WasteMetric(waste)


def evaluate_selection(
    inputs: Sequence[OutputGroup],
    selected_inputs: Sequence[int],
    options: CoinSelectionOptions,
) -> WasteMetric:
    """
    Score an arbitrary index selection the same way the selectors score theirs.

    Args:
        inputs: Full candidate list
        selected_inputs: Indices of the selected candidates
        options: Selection options

    Returns:
        Waste score of the selection

    Raises:
        ValueError: If an index is out of range or repeated
    """
    seen: set[int] = set()
    for index in selected_inputs:
        if index < 0 or index >= len(inputs):
            raise ValueError(f"Selected index {index} out of range for {len(inputs)} candidates")
        if index in seen:
            raise ValueError(f"Selected index {index} appears more than once")
        seen.add(index)

    accumulated_value = sum(inputs[i].value for i in selected_inputs)
    accumulated_weight = sum(inputs[i].weight for i in selected_inputs)
    estimated_fee = calculate_fee(accumulated_weight, options.target_feerate)

    return calculate_waste(
        inputs,
        selected_inputs,
        options,
        accumulated_value,
        accumulated_weight,
        estimated_fee,
    )
