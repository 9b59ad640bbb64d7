"""Smoke tests for the round-trip example and its configurations."""

from __future__ import annotations

import importlib.util
import pathlib

import pytest

EXAMPLE_DIR = pathlib.Path(__file__).resolve().parents[1] / "examples" / "round_trip"


def _load(path: pathlib.Path, name: str):
    module_spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="module")
def round_trip_main():
    return _load(EXAMPLE_DIR / "main.py", "round_trip_main")


@pytest.mark.parametrize("config_name", ["beta", "dirichlet", "wishart"])
def test_round_trip_within_tolerance(round_trip_main, config_name):
    config = _load(EXAMPLE_DIR / "configs" / f"{config_name}.py", f"config_{config_name}").get_config()
    config.num_samples = 20
    assert round_trip_main.round_trip(config) <= config.tolerance


def test_unknown_distribution(round_trip_main):
    config = _load(EXAMPLE_DIR / "configs" / "beta.py", "config_beta_unknown").get_config()
    config.distribution = "cauchy"
    with pytest.raises(ValueError):
        round_trip_main.make_distribution(config)
