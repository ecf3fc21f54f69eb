"""
coinselect - Blockchain-agnostic coin selection

Picks which output groups to spend for a payment while minimizing waste.
"""

__version__ = "0.1.0"

from coinselect.algorithms import (
    select_coin_bnb,
    select_coin_fifo,
    select_coin_knapsack,
    select_coin_lowestlarger,
    select_coin_srd,
)
from coinselect.fees import calculate_fee, effective_value
from coinselect.models import (
    CoinSelectionOptions,
    ExcessStrategy,
    InsufficientFundsError,
    NoSolutionFoundError,
    OutputGroup,
    SelectionAlgorithm,
    SelectionError,
    SelectionOutput,
    WasteMetric,
)
from coinselect.selector import select_coin
from coinselect.waste import calculate_waste, evaluate_selection

__all__ = [
    "CoinSelectionOptions",
    "ExcessStrategy",
    "InsufficientFundsError",
    "NoSolutionFoundError",
    "OutputGroup",
    "SelectionAlgorithm",
    "SelectionError",
    "SelectionOutput",
    "WasteMetric",
    "calculate_fee",
    "calculate_waste",
    "effective_value",
    "evaluate_selection",
    "select_coin",
    "select_coin_bnb",
    "select_coin_fifo",
    "select_coin_knapsack",
    "select_coin_lowestlarger",
    "select_coin_srd",
]
