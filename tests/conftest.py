"""
Shared fixtures for coin selection tests.
"""

from __future__ import annotations

import random
import sys
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from loguru import logger

from coinselect.models import CoinSelectionOptions, ExcessStrategy, OutputGroup


def _group(value: int, weight: int, creation_sequence: int | None = None) -> OutputGroup:
    return OutputGroup(value=value, weight=weight, creation_sequence=creation_sequence)


@pytest.fixture
def make_group() -> Callable[..., OutputGroup]:
    """Factory for output groups from value, weight and an optional creation sequence."""
    return _group


@pytest.fixture
def make_options() -> Callable[..., CoinSelectionOptions]:
    """Factory for options with the simplified test parameters."""

    def _make(target_value: int, **overrides: Any) -> CoinSelectionOptions:
        params: dict[str, Any] = {
            "target_value": target_value,
            "target_feerate": 0.5,
            "long_term_feerate": None,
            "min_absolute_fee": 0,
            "base_weight": 10,
            "drain_weight": 50,
            "drain_cost": 10,
            "cost_per_input": 20,
            "cost_per_output": 10,
            "min_drain_value": 500,
            "excess_strategy": ExcessStrategy.TO_DRAIN,
        }
        params.update(overrides)
        return CoinSelectionOptions(**params)

    return _make


@pytest.fixture
def basic_groups() -> list[OutputGroup]:
    """Three groups totalling 6000 sats."""
    return [_group(1000, 100), _group(2000, 200), _group(3000, 300)]


@pytest.fixture
def sequenced_groups() -> list[OutputGroup]:
    return [
        _group(1000, 100, creation_sequence=1),
        _group(2000, 200, creation_sequence=5000),
        _group(3000, 300, creation_sequence=1001),
    ]


@pytest.fixture
def exact_match_groups() -> list[OutputGroup]:
    """Only 5000/50 + 600/250 + 400/200 lands in the BnB window for target 5730."""
    return [
        _group(55000, 500),
        _group(400, 200),
        _group(40000, 300),
        _group(25000, 100),
        _group(35000, 150),
        _group(600, 250),
        _group(30000, 120),
        _group(5000, 50),
    ]


@pytest.fixture
def lowestlarger_groups() -> list[OutputGroup]:
    """Twelve groups totalling 21880 sats."""
    return [
        _group(100, 100),
        _group(1500, 200),
        _group(3400, 300),
        _group(2200, 150),
        _group(1190, 200),
        _group(3300, 100),
        _group(1000, 190),
        _group(2000, 210),
        _group(3000, 300),
        _group(2250, 250),
        _group(190, 220),
        _group(1750, 170),
    ]


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible runs."""
    return random.Random(42)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Restore the default loguru sink after tests that reconfigure it."""
    yield
    logger.remove()
    logger.add(sys.stderr)
