"""
Command-line interface for coin selection.
"""

from __future__ import annotations

import json
import random
import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from coinselect.config import get_settings
from coinselect.models import (
    CoinSelectionOptions,
    ExcessStrategy,
    OutputGroup,
    SelectionAlgorithm,
    SelectionError,
)
from coinselect.selector import run_algorithm, select_coin
from coinselect.waste import evaluate_selection

app = typer.Typer(
    name="coinselect",
    help="Coin selection - choose which outputs to spend",
    add_completion=False,
)

_candidates_adapter = TypeAdapter(list[OutputGroup])


def setup_logging(level: str) -> None:
    """Configure loguru logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )


def load_candidates(path: Path) -> list[OutputGroup]:
    """
    Load output groups from a JSON file.

    The file must contain a list of objects with at least ``value`` and ``weight``.

    Raises:
        ValueError: If the file cannot be read or does not validate
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ValueError(f"Cannot read candidates file {path}: {e}") from e
    try:
        return _candidates_adapter.validate_json(data)
    except ValidationError as e:
        raise ValueError(f"Invalid candidates file {path}: {e}") from e


def build_options(
    target: int,
    feerate: float,
    long_term_feerate: float | None,
    min_absolute_fee: int,
    base_weight: int,
    drain_weight: int,
    drain_cost: int,
    cost_per_input: int,
    cost_per_output: int,
    min_drain_value: int,
    excess_strategy: ExcessStrategy,
) -> CoinSelectionOptions:
    try:
        return CoinSelectionOptions(
            target_value=target,
            target_feerate=feerate,
            long_term_feerate=long_term_feerate,
            min_absolute_fee=min_absolute_fee,
            base_weight=base_weight,
            drain_weight=drain_weight,
            drain_cost=drain_cost,
            cost_per_input=cost_per_input,
            cost_per_output=cost_per_output,
            min_drain_value=min_drain_value,
            excess_strategy=excess_strategy,
        )
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e


def parse_indices(raw: str) -> list[int]:
    """Parse a comma separated index list such as ``0,2,5``."""
    try:
        return [int(part) for part in raw.split(",") if part.strip()]
    except ValueError as e:
        raise typer.BadParameter(f"Invalid index list: {raw}") from e


CandidatesArg = Annotated[
    Path, typer.Argument(help="JSON file with a list of output groups (value, weight, ...)")
]
TargetOpt = Annotated[int, typer.Option("--target", "-t", help="Target value in sats")]
FeerateOpt = Annotated[float, typer.Option("--feerate", "-f", help="Feerate in sats per WU")]
LongTermFeerateOpt = Annotated[
    float | None, typer.Option("--long-term-feerate", help="Long-term feerate in sats per WU")
]
MinAbsoluteFeeOpt = Annotated[int, typer.Option("--min-absolute-fee", help="Fee floor in sats")]
BaseWeightOpt = Annotated[int, typer.Option("--base-weight", help="Template transaction weight")]
DrainWeightOpt = Annotated[int, typer.Option("--drain-weight", help="Change output weight")]
DrainCostOpt = Annotated[int, typer.Option("--drain-cost", help="Cost of change in sats")]
CostPerInputOpt = Annotated[int, typer.Option("--cost-per-input", help="Per-input cost in sats")]
CostPerOutputOpt = Annotated[
    int, typer.Option("--cost-per-output", help="Per-output cost in sats")
]
MinDrainValueOpt = Annotated[
    int, typer.Option("--min-drain-value", help="Smallest change output in sats")
]
ExcessStrategyOpt = Annotated[
    ExcessStrategy, typer.Option("--excess-strategy", help="What to do with excess value")
]
LogLevelOpt = Annotated[str | None, typer.Option("--log-level", "-l", help="Log level")]


@app.command("select")
def select_command(
    candidates: CandidatesArg,
    target: TargetOpt,
    feerate: FeerateOpt,
    long_term_feerate: LongTermFeerateOpt = None,
    min_absolute_fee: MinAbsoluteFeeOpt = 0,
    base_weight: BaseWeightOpt = 0,
    drain_weight: DrainWeightOpt = 0,
    drain_cost: DrainCostOpt = 0,
    cost_per_input: CostPerInputOpt = 0,
    cost_per_output: CostPerOutputOpt = 0,
    min_drain_value: MinDrainValueOpt = 0,
    excess_strategy: ExcessStrategyOpt = ExcessStrategy.TO_DRAIN,
    algorithm: Annotated[
        str,
        typer.Option(
            "--algorithm",
            "-a",
            help="all | bnb | srd | fifo | lowestlarger | knapsack",
        ),
    ] = "all",
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed")] = None,
    log_level: LogLevelOpt = None,
) -> None:
    """Select inputs for a payment and print the result as JSON."""
    settings = get_settings()
    setup_logging(log_level or settings.log_level)

    options = build_options(
        target,
        feerate,
        long_term_feerate,
        min_absolute_fee,
        base_weight,
        drain_weight,
        drain_cost,
        cost_per_input,
        cost_per_output,
        min_drain_value,
        excess_strategy,
    )

    try:
        inputs = load_candidates(candidates)
    except ValueError as e:
        logger.error(str(e))
        raise typer.Exit(2) from e

    if seed is None:
        seed = settings.seed
    rng = random.Random(seed)

    try:
        if algorithm == "all":
            result = select_coin(
                inputs,
                options,
                rng,
                bnb_tries=settings.bnb_tries,
                knapsack_iterations=settings.knapsack_iterations,
            )
        else:
            try:
                chosen = SelectionAlgorithm(algorithm)
            except ValueError as e:
                raise typer.BadParameter(f"Unknown algorithm: {algorithm}") from e
            result = run_algorithm(
                chosen,
                inputs,
                options,
                rng,
                bnb_tries=settings.bnb_tries,
                knapsack_iterations=settings.knapsack_iterations,
            )
    except SelectionError as e:
        logger.error(f"Selection failed: {e}")
        raise typer.Exit(1) from e

    output = {
        "algorithm": result.algorithm.value,
        "selected_inputs": result.selected_inputs,
        "waste": result.waste,
        "selected_value": sum(inputs[i].value for i in result.selected_inputs),
        "selected_weight": sum(inputs[i].weight for i in result.selected_inputs),
    }
    typer.echo(json.dumps(output))


@app.command("evaluate")
def evaluate_command(
    candidates: CandidatesArg,
    select: Annotated[
        str, typer.Option("--select", "-s", help="Comma separated candidate indices")
    ],
    target: TargetOpt,
    feerate: FeerateOpt,
    long_term_feerate: LongTermFeerateOpt = None,
    min_absolute_fee: MinAbsoluteFeeOpt = 0,
    base_weight: BaseWeightOpt = 0,
    drain_weight: DrainWeightOpt = 0,
    drain_cost: DrainCostOpt = 0,
    cost_per_input: CostPerInputOpt = 0,
    cost_per_output: CostPerOutputOpt = 0,
    min_drain_value: MinDrainValueOpt = 0,
    excess_strategy: ExcessStrategyOpt = ExcessStrategy.TO_DRAIN,
    log_level: LogLevelOpt = None,
) -> None:
    """Print the waste of an externally chosen selection as JSON."""
    settings = get_settings()
    setup_logging(log_level or settings.log_level)

    options = build_options(
        target,
        feerate,
        long_term_feerate,
        min_absolute_fee,
        base_weight,
        drain_weight,
        drain_cost,
        cost_per_input,
        cost_per_output,
        min_drain_value,
        excess_strategy,
    )
    indices = parse_indices(select)

    try:
        inputs = load_candidates(candidates)
        waste = evaluate_selection(inputs, indices, options)
    except ValueError as e:
        logger.error(str(e))
        raise typer.Exit(2) from e

    output = {
        "selected_inputs": indices,
        "waste": waste,
        "selected_value": sum(inputs[i].value for i in indices),
        "selected_weight": sum(inputs[i].weight for i in indices),
    }
    typer.echo(json.dumps(output))


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
