"""
Run every selection algorithm and keep the result with the least waste.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence

from loguru import logger

from coinselect.algorithms import (
    select_coin_bnb,
    select_coin_fifo,
    select_coin_knapsack,
    select_coin_lowestlarger,
    select_coin_srd,
)
from coinselect.constants import BNB_TRIES, KNAPSACK_ITERATIONS
from coinselect.models import (
    CoinSelectionOptions,
    InsufficientFundsError,
    NoSolutionFoundError,
    OutputGroup,
    SelectionAlgorithm,
    SelectionError,
    SelectionOutput,
)

# Order in which algorithms run; on equal waste the earlier one wins
DEFAULT_ALGORITHMS: tuple[SelectionAlgorithm, ...] = (
    SelectionAlgorithm.BNB,
    SelectionAlgorithm.SRD,
    SelectionAlgorithm.FIFO,
    SelectionAlgorithm.LOWEST_LARGER,
    SelectionAlgorithm.KNAPSACK,
)


def run_algorithm(
    algorithm: SelectionAlgorithm,
    inputs: Sequence[OutputGroup],
    options: CoinSelectionOptions,
    rng: random.Random | None = None,
    bnb_tries: int = BNB_TRIES,
    knapsack_iterations: int = KNAPSACK_ITERATIONS,
) -> SelectionOutput:
    """Run a single selection algorithm by name."""
    if rng is None:
        rng = random.Random()

    runners: dict[SelectionAlgorithm, Callable[[], SelectionOutput]] = {
        SelectionAlgorithm.BNB: lambda: select_coin_bnb(inputs, options, rng, bnb_tries),
        SelectionAlgorithm.SRD: lambda: select_coin_srd(inputs, options, rng),
        SelectionAlgorithm.FIFO: lambda: select_coin_fifo(inputs, options),
        SelectionAlgorithm.LOWEST_LARGER: lambda: select_coin_lowestlarger(inputs, options),
        SelectionAlgorithm.KNAPSACK: lambda: select_coin_knapsack(
            inputs, options, rng, knapsack_iterations
        ),
    }
    return runners[SelectionAlgorithm(algorithm)]()


def select_coin(
    inputs: Sequence[OutputGroup],
    options: CoinSelectionOptions,
    rng: random.Random | None = None,
    algorithms: Sequence[SelectionAlgorithm] | None = None,
    bnb_tries: int = BNB_TRIES,
    knapsack_iterations: int = KNAPSACK_ITERATIONS,
) -> SelectionOutput:
    """
    Run all selection algorithms and return the result with the lowest waste.

    Args:
        inputs: Candidate output groups
        options: Selection options
        rng: Random source shared by the randomized algorithms
        algorithms: Algorithms to run, in order (default: all)
        bnb_tries: Branch-and-Bound search budget
        knapsack_iterations: Rounds per knapsack subset pass

    Returns:
        The lowest-waste selection

    Raises:
        ValueError: If ``algorithms`` is empty
        InsufficientFundsError: If all algorithms failed and any reported insufficient funds
        NoSolutionFoundError: If all algorithms failed to find a solution
    """
    if algorithms is None:
        algorithms = DEFAULT_ALGORITHMS
    if not algorithms:
        raise ValueError("At least one selection algorithm is required")
    if rng is None:
        rng = random.Random()

    results: list[SelectionOutput] = []
    errors: list[SelectionError] = []

    for algorithm in algorithms:
        try:
            result = run_algorithm(
                algorithm, inputs, options, rng, bnb_tries, knapsack_iterations
            )
        except SelectionError as e:
            logger.debug(f"{SelectionAlgorithm(algorithm).value} failed: {e}")
            errors.append(e)
            continue
        logger.debug(
            f"{result.algorithm.value}: {len(result.selected_inputs)} inputs, "
            f"waste {result.waste}"
        )
        results.append(result)

    if not results:
        if any(isinstance(e, InsufficientFundsError) for e in errors):
            raise InsufficientFundsError(
                f"Insufficient funds for target {options.target_value} "
                f"from {len(inputs)} candidates"
            )
        raise NoSolutionFoundError(
            f"No algorithm found a selection for target {options.target_value}"
        )

    best = min(results, key=lambda r: r.waste)
    logger.info(
        f"Selected {len(best.selected_inputs)} inputs via {best.algorithm.value} "
        f"(waste {best.waste}, {len(results)}/{len(algorithms)} algorithms succeeded)"
    )
    return best
