"""
Central pytest configuration for this project.

This file is automatically discovered by pytest and holds fixtures shared
across test modules.

Notes
-----
- Install the package in editable mode (`pip install -e .[test]`) so that
  imports resolve the same way locally and in CI.
- Keep this file focused on test setup. Do not add application logic here.
"""

import matplotlib

matplotlib.use("Agg")

import pytest

from sas_staircase.procedures import StochasticApproximationStaircase


@pytest.fixture
def staircase():
    """phi=0.85, c=30, x_1=100, unrounded steps, truncated staircase, no bounds."""
    return StochasticApproximationStaircase(0.85, 30, 100, round_steps=False,
                                            truncate_staircase=True)


@pytest.fixture
def response_sequence():
    """A fixed sequence with four reversals (trials 3, 5, 6 and 7)."""
    return [1, 1, 0, 0, 1, 0, 1, 1]
