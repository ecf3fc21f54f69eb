"""
Single Random Draw coin selection.

Candidates are drawn in a uniformly random order until the target is covered. The ordering is
independent per call, so repeated calls explore different valid subsets and the result does not
leak a deterministic wallet fingerprint.
"""

from __future__ import annotations

import random
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


def select_coin_srd(
    inputs: Sequence[OutputGroup],
    options: CoinSelectionOptions,
    rng: random.Random | None = None,
) -> SelectionOutput:
    """
    Perform coin selection via Single Random Draw.

    The fee estimate starts from the transaction's base weight and grows with each drawn
    group's weight.

    Args:
        inputs: Candidate output groups
        options: Selection options
        rng: Random source for the permutation (a fresh one per call if not given)

    Returns:
        Selection with indices into ``inputs``

    Raises:
        InsufficientFundsError: If the whole shuffled list does not reach the threshold
    """
    if rng is None:
        rng = random.Random()

    randomized = list(range(len(inputs)))
    rng.shuffle(randomized)

    accumulated_value = 0
    accumulated_weight = 0
    input_count = 0
    estimated_fee = calculate_fee(options.base_weight, options.target_feerate)
    selected_inputs: list[int] = []

    def threshold() -> int:
        return (
            options.target_value
            + options.min_drain_value
            + max(estimated_fee, options.min_absolute_fee)
        )

    for index in randomized:
        selected_inputs.append(index)
        accumulated_value += inputs[index].value
        accumulated_weight += inputs[index].weight
        input_count += inputs[index].input_count
        estimated_fee = calculate_fee(
            options.base_weight + accumulated_weight, options.target_feerate
        )
        if accumulated_value >= threshold():
            break

    if accumulated_value < threshold():
        raise InsufficientFundsError(
            f"Insufficient funds: need {threshold()}, have {accumulated_value}"
        )

    logger.debug(
        f"SRD drew {len(selected_inputs)} groups ({input_count} inputs), fee {estimated_fee}"
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
        selected_inputs=selected_inputs, waste=waste, algorithm=SelectionAlgorithm.SRD
    )
