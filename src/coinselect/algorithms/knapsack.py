"""
Knapsack coin selection.

Randomized subset-sum approximation over effective values, in the style of Bitcoin Core's
knapsack solver: look for an exact single match, then try to combine the candidates smaller
than the target as closely as possible, and fall back to the lowest single candidate larger
than the target when that is the better deal. Avoids the fee growth of a naive largest-first
sweep, which keeps adding inputs whose fees push the target further away.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

from loguru import logger

from coinselect.constants import KNAPSACK_ITERATIONS
from coinselect.fees import calculate_fee, effective_value
from coinselect.models import (
    CoinSelectionOptions,
    InsufficientFundsError,
    OutputGroup,
    SelectionAlgorithm,
    SelectionOutput,
)
from coinselect.waste import calculate_waste


def approximate_best_subset(
    values: Sequence[int],
    total_lower: int,
    target: int,
    rng: random.Random,
    iterations: int = KNAPSACK_ITERATIONS,
) -> tuple[list[bool], int]:
    """
    Find a subset of ``values`` whose sum is as close to ``target`` as possible from above.

    Each round makes a random inclusion pass, then a second pass that adds every value not yet
    included. Whenever the running total reaches the target it is recorded if it beats the
    best so far, and the last value is removed again to look for a tighter fit.

    Args:
        values: Candidate values, sorted descending
        total_lower: Sum of all values
        target: Amount to reach
        rng: Random source
        iterations: Number of rounds

    Returns:
        (inclusion flags, best total). Starts from "everything included".
    """
    best = [True] * len(values)
    best_total = total_lower

    for _ in range(iterations):
        if best_total == target:
            break
        included = [False] * len(values)
        total = 0
        reached_target = False
        for pass_number in range(2):
            if reached_target:
                break
            for i, value in enumerate(values):
                # First pass: random coin flip. Second pass: add whatever is still left out.
                take = rng.random() < 0.5 if pass_number == 0 else not included[i]
                if not take:
                    continue
                total += value
                included[i] = True
                if total >= target:
                    reached_target = True
                    if total < best_total:
                        best_total = total
                        best = included[:]
                    total -= value
                    included[i] = False

    return best, best_total


def knapsack(
    adjusted_target: int,
    min_change: int,
    candidates: Sequence[tuple[int, int]],
    rng: random.Random,
    iterations: int = KNAPSACK_ITERATIONS,
) -> list[int]:
    """
    Select candidates whose value sum covers ``adjusted_target`` as tightly as possible.

    Args:
        adjusted_target: Target value plus estimated fee
        min_change: Smallest change amount worth creating
        candidates: (index, value) pairs
        rng: Random source
        iterations: Rounds per approximate best subset pass

    Returns:
        Selected indices

    Raises:
        InsufficientFundsError: If all candidates together are below ``adjusted_target``
    """
    shuffled = list(candidates)
    rng.shuffle(shuffled)

    smaller: list[tuple[int, int]] = []
    total_lower = 0
    lowest_larger: tuple[int, int] | None = None

    for index, value in shuffled:
        if value == adjusted_target:
            logger.debug(f"Knapsack exact single match: candidate {index}")
            return [index]
        if value < adjusted_target + min_change:
            smaller.append((index, value))
            total_lower += value
        elif lowest_larger is None or value < lowest_larger[1]:
            lowest_larger = (index, value)

    if total_lower == adjusted_target:
        return [index for index, _ in smaller]

    if total_lower < adjusted_target:
        if lowest_larger is None:
            raise InsufficientFundsError(
                f"Insufficient funds: need {adjusted_target}, have {total_lower}"
            )
        return [lowest_larger[0]]

    smaller.sort(key=lambda item: item[1], reverse=True)
    values = [value for _, value in smaller]

    best, best_total = approximate_best_subset(
        values, total_lower, adjusted_target, rng, iterations
    )
    if best_total != adjusted_target and total_lower >= adjusted_target + min_change:
        best, best_total = approximate_best_subset(
            values, total_lower, adjusted_target + min_change, rng, iterations
        )

    # Prefer a single larger candidate if the combination either leaves too little change
    # or is not actually cheaper
    if lowest_larger is not None and (
        (best_total != adjusted_target and best_total < adjusted_target + min_change)
        or lowest_larger[1] <= best_total
    ):
        return [lowest_larger[0]]

    return [index for (index, _), include in zip(smaller, best) if include]


def select_coin_knapsack(
    inputs: Sequence[OutputGroup],
    options: CoinSelectionOptions,
    rng: random.Random | None = None,
    iterations: int = KNAPSACK_ITERATIONS,
) -> SelectionOutput:
    """
    Perform coin selection via the knapsack solver.

    Works on effective values, so each candidate pays for itself; the adjusted target adds the
    base transaction fee (or the minimum absolute fee, if higher). Candidates whose fee eats
    their entire value are never selected.

    Raises:
        InsufficientFundsError: If the candidates cannot cover the adjusted target
    """
    if rng is None:
        rng = random.Random()

    feerate = options.target_feerate
    adjusted_target = options.target_value + max(
        calculate_fee(options.base_weight, feerate), options.min_absolute_fee
    )

    candidates = []
    for index, group in enumerate(inputs):
        value = effective_value(group, feerate)
        if value == 0:
            logger.debug(f"Knapsack skipping candidate {index}: no effective value")
            continue
        candidates.append((index, value))

    selected_inputs = knapsack(
        adjusted_target, options.min_drain_value, candidates, rng, iterations
    )

    accumulated_value = sum(inputs[i].value for i in selected_inputs)
    accumulated_weight = sum(inputs[i].weight for i in selected_inputs)
    estimated_fee = calculate_fee(accumulated_weight, feerate)
    logger.debug(f"Knapsack selected {len(selected_inputs)} of {len(inputs)} groups")

    waste = calculate_waste(
        inputs,
        selected_inputs,
        options,
        accumulated_value,
        accumulated_weight,
        estimated_fee,
    )
    return SelectionOutput(
        selected_inputs=selected_inputs, waste=waste, algorithm=SelectionAlgorithm.KNAPSACK
    )
