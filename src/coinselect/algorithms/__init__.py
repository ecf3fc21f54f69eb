"""
Coin selection algorithms.

Each selector takes the candidate list and options, and returns a SelectionOutput whose indices
refer to the caller's list, or raises a SelectionError.
"""

from coinselect.algorithms.bnb import select_coin_bnb
from coinselect.algorithms.fifo import select_coin_fifo
from coinselect.algorithms.knapsack import select_coin_knapsack
from coinselect.algorithms.lowestlarger import select_coin_lowestlarger
from coinselect.algorithms.srd import select_coin_srd

__all__ = [
    "select_coin_bnb",
    "select_coin_fifo",
    "select_coin_knapsack",
    "select_coin_lowestlarger",
    "select_coin_srd",
]
