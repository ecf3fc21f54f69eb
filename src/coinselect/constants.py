"""
Coin selection search limits and defaults.
"""

from __future__ import annotations

# Maximum number of nodes the Branch-and-Bound search visits before giving up.
# Bounds the runtime on inputs where no combination lands inside the match window.
BNB_TRIES = 1_000_000

# Number of randomized rounds per approximate best subset pass in the knapsack solver.
# Matches the iteration count Bitcoin Core uses for its knapsack fallback.
KNAPSACK_ITERATIONS = 1000
