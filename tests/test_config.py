"""
Tests for settings loading.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from coinselect.config import Settings, get_settings
from coinselect.constants import BNB_TRIES, KNAPSACK_ITERATIONS


def test_defaults(monkeypatch) -> None:
    for name in ("LOG_LEVEL", "BNB_TRIES", "KNAPSACK_ITERATIONS", "SEED"):
        monkeypatch.delenv(f"COINSELECT_{name}", raising=False)
    settings = Settings(_env_file=None)
    assert settings.log_level == "INFO"
    assert settings.bnb_tries == BNB_TRIES
    assert settings.knapsack_iterations == KNAPSACK_ITERATIONS
    assert settings.seed is None


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("COINSELECT_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("COINSELECT_BNB_TRIES", "5000")
    monkeypatch.setenv("coinselect_seed", "7")
    settings = get_settings()
    assert settings.log_level == "DEBUG"
    assert settings.bnb_tries == 5000
    assert settings.seed == 7


def test_rejects_zero_tries(monkeypatch) -> None:
    monkeypatch.setenv("COINSELECT_BNB_TRIES", "0")
    with pytest.raises(ValidationError):
        get_settings()
