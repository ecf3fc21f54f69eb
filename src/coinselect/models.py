"""
Coin selection data models.

Candidates and options are validated with Pydantic; selection results are plain dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NewType

from pydantic import BaseModel, Field

# Lower is better. Always non-negative.
WasteMetric = NewType("WasteMetric", int)


class SelectionError(Exception):
    """Base class for coin selection failures."""

    pass


class InsufficientFundsError(SelectionError):
    """Raised when all eligible candidates together cannot reach the required amount."""

    pass


class NoSolutionFoundError(SelectionError):
    """Raised when the Branch-and-Bound search runs out of candidates or tries."""

    pass


class ExcessStrategy(str, Enum):
    """What happens to value left over after the target and fee are covered."""

    TO_FEE = "to_fee"
    TO_RECIPIENT = "to_recipient"
    TO_DRAIN = "to_drain"


class SelectionAlgorithm(str, Enum):
    BNB = "bnb"
    SRD = "srd"
    FIFO = "fifo"
    LOWEST_LARGER = "lowestlarger"
    KNAPSACK = "knapsack"


class OutputGroup(BaseModel):
    """
    A selection candidate: a single UTXO or a bundle of UTXOs spent together.

    The weight must include every input field (prevout, nSequence, scriptSig and witness)
    so that fees derived from it are accurate.
    """

    value: int = Field(..., ge=0, description="Total value in sats")
    weight: int = Field(..., ge=0, description="Weight units consumed when spent")
    input_count: int = Field(default=1, ge=1)
    is_segwit: bool = False
    # Relative age, lower is older. None means no age information (sorted last by FIFO).
    creation_sequence: int | None = Field(default=None, ge=0)

    model_config = {"frozen": True}


class CoinSelectionOptions(BaseModel):
    """Target and cost parameters for a single selection attempt."""

    target_value: int = Field(..., ge=0, description="Amount to cover in sats")
    target_feerate: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Sats per weight unit"
    )
    long_term_feerate: float | None = Field(
        default=None,
        ge=0,
        allow_inf_nan=False,
        description="Expected future feerate, enables the long-term waste term",
    )
    min_absolute_fee: int = Field(default=0, ge=0, description="Fee floor (e.g. for RBF)")

    # Weight of the template transaction: fixed fields and outputs
    base_weight: int = Field(default=0, ge=0)
    # Extra weight if a drain (change) output is added
    drain_weight: int = Field(default=0, ge=0)
    # Cost of creating the drain output and spending it later
    drain_cost: int = Field(default=0, ge=0)

    cost_per_input: int = Field(default=0, ge=0)
    cost_per_output: int = Field(default=0, ge=0)
    min_drain_value: int = Field(default=0, ge=0, description="Smallest change worth creating")

    excess_strategy: ExcessStrategy = ExcessStrategy.TO_DRAIN

    model_config = {"frozen": True}


@dataclass
class SelectionOutput:
    """Result of a successful coin selection."""

    # Indices into the caller's candidate list (not any sorted working copy)
    selected_inputs: list[int]
    waste: WasteMetric
    algorithm: SelectionAlgorithm
