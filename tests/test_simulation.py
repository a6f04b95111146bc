"""
test_simulation.py
------------------

Tests for the simulated observer, the simulation loop and the plotting
helpers that consume a finished run.
"""

import matplotlib.pyplot as plt
import numpy as np
import pytest

from sas_staircase import ObserverResponseModel, StochasticApproximationStaircase, simulate_staircase
from sas_staircase.visualization import plot_staircase, print_progression


@pytest.fixture
def observer():
    return ObserverResponseModel(slope=-0.3, guess_rate=0.02, lapse_rate=0.02,
                                 threshold_probability=0.85)


class TestObserverResponseModel:
    def test_probability_at_threshold(self, observer):
        p = observer.get_response_probability(40, 40)
        assert p == pytest.approx(0.02 + 0.96 * 0.85)

    def test_negative_slope_decreases_with_level(self, observer):
        low = observer.get_response_probability(20, 40)
        high = observer.get_response_probability(60, 40)
        assert low > high

    @pytest.mark.parametrize("params", [
        {"threshold_probability": 1.2},
        {"slope": 0},
        {"guess_rate": 0.6, "lapse_rate": 0.5},
        {"lapse_rate": -0.1},
    ])
    def test_invalid_parameters(self, params):
        with pytest.raises(ValueError):
            ObserverResponseModel(**params)

    def test_sample_response_is_reproducible(self, observer):
        a = [observer.sample_response(40, 40, random_state=seed) for seed in range(20)]
        b = [observer.sample_response(40, 40, random_state=seed) for seed in range(20)]
        assert a == b
        assert all(isinstance(r, bool) for r in a)


class TestSimulateStaircase:
    def test_runs_until_trial_stop(self, observer):
        sas = StochasticApproximationStaircase(0.85, 30, 100, stop_threshold=20)
        result = simulate_staircase(sas, 40, observer, random_state=1)
        assert result is sas
        assert sas.stopped
        assert sas.trial_count == 20
        assert len(sas.responses) == 20

    def test_respects_max_trials(self, observer):
        sas = StochasticApproximationStaircase(0.85, 30, 100, stop_mode='reversals',
                                               stop_threshold=10000)
        simulate_staircase(sas, 40, observer, random_state=1, max_trials=30)
        assert not sas.stopped
        assert len(sas.responses) == 30

    def test_issued_values_in_range(self, observer):
        sas = StochasticApproximationStaircase(0.85, 30, 100, x_min=0, x_max=120,
                                               stop_threshold=100)
        simulate_staircase(sas, 40, observer, random_state=3)
        issued = sas.issued_values
        assert np.all((issued >= 0) & (issued <= 120))

    def test_same_seed_same_run(self, observer):
        runs = []
        for _ in range(2):
            sas = StochasticApproximationStaircase(0.85, 30, 100, stop_mode='reversals',
                                                   stop_threshold=8, round_steps=False)
            simulate_staircase(sas, 40, observer, random_state=5)
            runs.append(sas)
        np.testing.assert_array_equal(runs[0].issued_values, runs[1].issued_values)
        np.testing.assert_array_equal(runs[0].responses, runs[1].responses)

    def test_continues_after_backstep(self, observer):
        sas = StochasticApproximationStaircase(0.85, 30, 100, stop_threshold=15)
        simulate_staircase(sas, 40, observer, random_state=2)
        sas.backstep(5)
        simulate_staircase(sas, 40, observer, random_state=9)
        assert sas.stopped
        assert len(sas.responses) == 15

    def test_default_observer(self):
        sas = StochasticApproximationStaircase(0.5, 10, 0, stop_threshold=5)
        simulate_staircase(sas, 0, random_state=0)
        assert sas.stopped


class TestVisualization:
    def test_plot_staircase(self, observer):
        sas = StochasticApproximationStaircase(0.85, 30, 100, stop_threshold=20)
        simulate_staircase(sas, 40, observer, random_state=1)
        ax = plot_staircase(sas, true_threshold=40, title="Run", show=False)
        assert ax.get_title() == "Run"
        assert len(ax.lines) == 2
        plt.close(ax.figure)

    def test_print_progression(self, staircase, capsys):
        staircase.update(1)
        staircase.update(0)
        print_progression(staircase)
        out = capsys.readouterr().out
        assert "Trial" in out
        assert "104.50" in out
        assert out.count("*") == 1
