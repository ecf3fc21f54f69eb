"""
First-In-First-Out coin selection: spend the oldest groups first.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from coinselect.fees import calculate_fee
from coinselect.models import (
    CoinSelectionOptions,
    InsufficientFundsError,
    OutputGroup,
    SelectionAlgorithm,
    SelectionOutput,
)
from coinselect.waste import calculate_waste


def _age_key(inputs: Sequence[OutputGroup], index: int) -> tuple[bool, int, int]:
    # Groups without a creation sequence go after all aged groups
    sequence = inputs[index].creation_sequence
    return (sequence is None, sequence or 0, index)


def select_coin_fifo(
    inputs: Sequence[OutputGroup],
    options: CoinSelectionOptions,
) -> SelectionOutput:
    """
    Perform coin selection via First-In-First-Out.

    Groups are taken in ascending ``creation_sequence`` order until the accumulated value
    covers target + fee + min drain value.

    Raises:
        InsufficientFundsError: If all groups together do not reach the threshold
    """
    accumulated_value = 0
    accumulated_weight = 0
    estimated_fee = 0
    selected_inputs: list[int] = []

    def threshold() -> int:
        return (
            options.target_value
            + max(estimated_fee, options.min_absolute_fee)
            + options.min_drain_value
        )

    for index in sorted(range(len(inputs)), key=lambda i: _age_key(inputs, i)):
        accumulated_value += inputs[index].value
        accumulated_weight += inputs[index].weight
        selected_inputs.append(index)
        estimated_fee = calculate_fee(accumulated_weight, options.target_feerate)
        if accumulated_value >= threshold():
            break

    if accumulated_value < threshold():
        raise InsufficientFundsError(
            f"Insufficient funds: need {threshold()}, have {accumulated_value}"
        )

    logger.debug(f"FIFO selected {len(selected_inputs)} of {len(inputs)} groups")
    waste = calculate_waste(
        inputs,
        selected_inputs,
        options,
        accumulated_value,
        accumulated_weight,
        estimated_fee,
    )
    return SelectionOutput(
        selected_inputs=selected_inputs, waste=waste, algorithm=SelectionAlgorithm.FIFO
    )
