"""Run a staircase against a simulated observer."""

import numpy as np

from .response_model import ObserverResponseModel
from ..utils.defaults import MAX_SIMULATED_TRIALS


def simulate_staircase(staircase, true_threshold, response_model=None,
                       random_state=None, max_trials=MAX_SIMULATED_TRIALS):
    """
    Drive a staircase with simulated responses until it stops.

    Args:
        staircase (StochasticApproximationStaircase): Procedure to run. It is
            updated in place from its current trial onwards.
        true_threshold (float): Threshold of the simulated observer.
        response_model (ObserverResponseModel): Observer; a default model is
            used if omitted.
        random_state (int or numpy.random.Generator): Seed for reproducibility.
        max_trials (int): Largest number of responses to feed in, for
            staircases whose stop criterion may never be met.

    Returns:
        StochasticApproximationStaircase: The same staircase, for chaining.
    """
    model = response_model or ObserverResponseModel()
    rng = np.random.default_rng(random_state)

    n_presented = 0
    while not staircase.stopped and n_presented < max_trials:
        response = model.sample_response(
            stimulus_level=staircase.current_value,
            true_threshold=true_threshold,
            random_state=rng
        )
        staircase.update(response)
        n_presented += 1

    return staircase
