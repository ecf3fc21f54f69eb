"""
Tests for the coinselect command-line interface.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from coinselect.cli import app, load_candidates, parse_indices

runner = CliRunner()

SCENARIO_ARGS = [
    "--target",
    "5730",
    "--feerate",
    "0.5",
    "--base-weight",
    "10",
    "--cost-per-input",
    "20",
    "--cost-per-output",
    "10",
    "--drain-cost",
    "10",
    "--log-level",
    "WARNING",
]


@pytest.fixture
def candidates_file(tmp_path: Path) -> Path:
    path = tmp_path / "candidates.json"
    groups = [
        {"value": 55000, "weight": 500},
        {"value": 400, "weight": 200},
        {"value": 40000, "weight": 300},
        {"value": 25000, "weight": 100},
        {"value": 35000, "weight": 150},
        {"value": 600, "weight": 250},
        {"value": 30000, "weight": 120},
        {"value": 5000, "weight": 50, "creation_sequence": 0},
    ]
    path.write_text(json.dumps(groups))
    return path


def test_load_candidates(candidates_file: Path) -> None:
    groups = load_candidates(candidates_file)
    assert len(groups) == 8
    assert groups[7].creation_sequence == 0
    assert groups[0].input_count == 1


def test_load_candidates_invalid(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"value": -5, "weight": 1}]))
    with pytest.raises(ValueError, match="Invalid candidates file"):
        load_candidates(path)


def test_load_candidates_missing(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Cannot read"):
        load_candidates(tmp_path / "missing.json")


def test_parse_indices() -> None:
    assert parse_indices("1,5,7") == [1, 5, 7]
    assert parse_indices("") == []


def test_select_bnb(candidates_file: Path) -> None:
    result = runner.invoke(
        app, ["select", str(candidates_file), *SCENARIO_ARGS, "--algorithm", "bnb", "--seed", "1"]
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["algorithm"] == "bnb"
    assert sorted(data["selected_inputs"]) == [1, 5, 7]
    assert data["waste"] == 10
    assert data["selected_value"] == 6000
    assert data["selected_weight"] == 500


def test_select_all(candidates_file: Path) -> None:
    result = runner.invoke(app, ["select", str(candidates_file), *SCENARIO_ARGS, "--seed", "3"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["algorithm"] == "bnb"


def test_select_insufficient_funds(candidates_file: Path) -> None:
    args = ["select", str(candidates_file), "--target", "1000000", "--feerate", "1"]
    result = runner.invoke(app, [*args, "--algorithm", "fifo"])
    assert result.exit_code == 1


def test_select_unknown_algorithm(candidates_file: Path) -> None:
    result = runner.invoke(
        app, ["select", str(candidates_file), *SCENARIO_ARGS, "--algorithm", "greedy"]
    )
    assert result.exit_code == 2


def test_select_invalid_file(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("not json")
    result = runner.invoke(app, ["select", str(path), *SCENARIO_ARGS])
    assert result.exit_code == 2


def test_evaluate(candidates_file: Path) -> None:
    result = runner.invoke(
        app,
        [
            "evaluate",
            str(candidates_file),
            "--select",
            "1,5,7",
            *SCENARIO_ARGS,
            "--excess-strategy",
            "to_fee",
        ],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["waste"] == 6000 - 5730 - 250
    assert data["selected_inputs"] == [1, 5, 7]


def test_evaluate_out_of_range(candidates_file: Path) -> None:
    result = runner.invoke(
        app, ["evaluate", str(candidates_file), "--select", "0,8", *SCENARIO_ARGS]
    )
    assert result.exit_code == 2
