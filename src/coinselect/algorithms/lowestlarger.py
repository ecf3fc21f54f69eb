"""
Lowest-Larger coin selection.

Prefers the largest groups that are still at or below the target, to keep the input count low,
and falls back to the smallest groups above the target when the smaller ones are not enough.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence

from loguru import logger

from coinselect.fees import calculate_fee, effective_value
from coinselect.models import (
    CoinSelectionOptions,
    InsufficientFundsError,
    OutputGroup,
    SelectionAlgorithm,
    SelectionOutput,
)
from coinselect.waste import calculate_waste


def select_coin_lowestlarger(
    inputs: Sequence[OutputGroup],
    options: CoinSelectionOptions,
) -> SelectionOutput:
    """
    Perform coin selection via Lowest Larger.

    Raises:
        InsufficientFundsError: If neither phase reaches target + fee
    """
    feerate = options.target_feerate
    target = options.target_value + options.min_drain_value

    # Ties on effective value keep original order
    sorted_inputs = sorted(range(len(inputs)), key=lambda i: effective_value(inputs[i], feerate))

    def is_larger(index: int) -> bool:
        group = inputs[index]
        return group.value > target + calculate_fee(group.weight, feerate)

    # First index whose group is strictly larger than the target
    boundary = bisect_left(sorted_inputs, True, key=is_larger)
    smaller = sorted_inputs[:boundary]
    larger = sorted_inputs[boundary:]

    accumulated_value = 0
    accumulated_weight = 0
    estimated_fee = 0
    selected_inputs: list[int] = []

    def threshold() -> int:
        return target + max(estimated_fee, options.min_absolute_fee)

    for index in [*reversed(smaller), *larger]:
        accumulated_value += inputs[index].value
        accumulated_weight += inputs[index].weight
        estimated_fee = calculate_fee(accumulated_weight, feerate)
        selected_inputs.append(index)
        if accumulated_value >= threshold():
            break

    if accumulated_value < threshold():
        raise InsufficientFundsError(
            f"Insufficient funds: need {threshold()}, have {accumulated_value}"
        )

    logger.debug(
        f"Lowest-larger selected {len(selected_inputs)} groups "
        f"({len(smaller)} at or below target, {len(larger)} above)"
    )
    waste = calculate_waste(
        inputs,
        selected_inputs,
        options,
        accumulated_value,
        accumulated_weight,
        estimated_fee,
    )
    return SelectionOutput(
        selected_inputs=selected_inputs,
        waste=waste,
        algorithm=SelectionAlgorithm.LOWEST_LARGER,
    )
