"""
Branch-and-Bound coin selection.

Searches for a subset whose effective value lands inside a narrow window above the target, so
that no change output is needed. Branch order is randomized per node, and the first match found
is returned; the search is depth-first, not exhaustive.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from coinselect.constants import BNB_TRIES
from coinselect.fees import calculate_fee, effective_value
from coinselect.models import (
    CoinSelectionOptions,
    NoSolutionFoundError,
    OutputGroup,
    SelectionAlgorithm,
    SelectionOutput,
)
from coinselect.waste import calculate_waste


@dataclass
class MatchParameters:
    """Acceptance window for the search."""

    target_for_match: int
    match_range: int

    @property
    def upper_bound(self) -> int:
        return self.target_for_match + self.match_range


def get_match_parameters(options: CoinSelectionOptions) -> MatchParameters:
    return MatchParameters(
        target_for_match=options.target_value
        + calculate_fee(options.base_weight, options.target_feerate)
        + options.cost_per_output,
        match_range=options.cost_per_input + options.cost_per_output,
    )


def _search(
    indices: list[int],
    eff_values: list[int],
    match: MatchParameters,
    max_tries: int,
    rng: random.Random,
) -> list[int] | None:
    """
    Depth-first include/exclude search over candidates sorted by descending value.

    Uses an explicit stack instead of recursion so deep candidate lists cannot hit the
    interpreter's recursion limit. Each stack entry is a pending node:
    (depth, accumulated effective value, parent selection length, index to append or None).
    Truncating the shared selection to the parent's length before visiting a node undoes
    whatever a failed sibling branch pushed.
    """
    selected: list[int] = []
    tries = max_tries
    stack: list[tuple[int, int, int, int | None]] = [(0, 0, 0, None)]

    while stack:
        depth, acc_value, parent_len, pick = stack.pop()
        del selected[parent_len:]
        if pick is not None:
            selected.append(pick)

        if acc_value > match.upper_bound:
            continue
        if acc_value >= match.target_for_match:
            logger.debug(f"BnB match after {max_tries - tries} tries: {selected}")
            return selected[:]

        tries -= 1
        if tries <= 0 or depth >= len(indices):
            continue

        length = len(selected)
        include = (depth + 1, acc_value + eff_values[depth], length, indices[depth])
        exclude = (depth + 1, acc_value, length, None)
        # Last pushed is explored first
        if rng.random() < 0.5:
            stack.append(exclude)
            stack.append(include)
        else:
            stack.append(include)
            stack.append(exclude)

    logger.debug(f"BnB found no match ({max_tries - max(tries, 0)} tries used)")
    return None


def select_coin_bnb(
    inputs: Sequence[OutputGroup],
    options: CoinSelectionOptions,
    rng: random.Random | None = None,
    max_tries: int = BNB_TRIES,
) -> SelectionOutput:
    """
    Perform coin selection via Branch and Bound.

    Args:
        inputs: Candidate output groups
        options: Selection options
        rng: Random source for branch ordering (a fresh one per call if not given)
        max_tries: Search node budget

    Returns:
        Selection with indices into ``inputs``

    Raises:
        NoSolutionFoundError: If no subset lands inside the match window
    """
    if rng is None:
        rng = random.Random()

    match = get_match_parameters(options)

    # Largest first, so value-dense branches are explored before the budget runs out
    order = sorted(range(len(inputs)), key=lambda i: inputs[i].value, reverse=True)
    eff_values = [effective_value(inputs[i], options.target_feerate) for i in order]

    selected = _search(order, eff_values, match, max_tries, rng)
    if selected is None:
        raise NoSolutionFoundError(
            f"No selection within [{match.target_for_match}, {match.upper_bound}] "
            f"from {len(inputs)} candidates"
        )

    accumulated_value = sum(inputs[i].value for i in selected)
    accumulated_weight = sum(inputs[i].weight for i in selected)
    estimated_fee = calculate_fee(accumulated_weight, options.target_feerate)
    waste = calculate_waste(
        inputs,
        selected,
        options,
        accumulated_value,
        accumulated_weight,
        estimated_fee,
    )
    return SelectionOutput(
        selected_inputs=selected, waste=waste, algorithm=SelectionAlgorithm.BNB
    )
