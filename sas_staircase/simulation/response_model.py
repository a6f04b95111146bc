"""Psychometric observer model for simulated staircase runs."""

import numpy as np
from scipy.special import expit, logit

from ..utils.defaults import DEFAULT_SLOPE, DEFAULT_GUESS_RATE, DEFAULT_LAPSE_RATE


class ObserverResponseModel:
    """
    Models the probability of a positive response at a given stimulus level.

    A negative slope gives an observer whose positive responses become rarer
    as the level rises.
    """

    def __init__(self, slope=DEFAULT_SLOPE, guess_rate=DEFAULT_GUESS_RATE,
                 lapse_rate=DEFAULT_LAPSE_RATE, threshold_probability=0.5):
        """Initialize the observer model."""
        if not 0 <= threshold_probability <= 1:
            raise ValueError("threshold_probability must be between 0 and 1")
        if slope == 0:
            raise ValueError("slope must be non-zero")
        if guess_rate < 0 or lapse_rate < 0 or guess_rate + lapse_rate >= 1:
            raise ValueError("guess_rate and lapse_rate must be non-negative and sum to less than 1")

        self.slope = slope
        self.guess_rate = guess_rate
        self.lapse_rate = lapse_rate
        self.threshold_probability = threshold_probability

        # Shift so that the unscaled curve passes threshold_probability at the true threshold
        if threshold_probability == 0:
            self.threshold_bias = float('-inf')
        elif threshold_probability == 1:
            self.threshold_bias = float('inf')
        else:
            self.threshold_bias = logit(threshold_probability) / self.slope

    def get_response_probability(self, stimulus_level, true_threshold):
        """Calculate probability of a positive response for given stimulus level."""
        x = self.slope * (stimulus_level - true_threshold + self.threshold_bias)
        p = expit(x)
        return self.guess_rate + (1 - self.guess_rate - self.lapse_rate) * p

    def sample_response(self, stimulus_level, true_threshold, random_state=None):
        """Generate binary response based on probability model."""
        rng = np.random.default_rng(random_state)
        p = self.get_response_probability(stimulus_level, true_threshold)
        return bool(rng.random() < p)
