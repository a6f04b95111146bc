"""
Stochastic Approximation Staircase (SAS) procedure.

The staircase converges on the stimulus level at which the observer responds
'yes' (or correctly) with the target probability ``phi``. After each trial the
level moves by

                         c
    x_{n+1} = x_n - --------- (response - phi)
                       1 + m

where ``m`` is the number of reversals so far. The step can be bounded per
direction, the issued level can be clipped to ``[x_min, x_max]`` and the
procedure stops after a fixed number of trials or reversals.
"""
# Standard library imports
import math
import numbers
import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

# Third-party imports
import numpy as np

# Local imports
from .update_rules import UpdateRule, accepts_four_arguments, default_update_rule
from ..utils.defaults import (
    DEFAULT_X_MAX,
    DEFAULT_X_MIN,
    DEFAULT_STEP_BOUND_DOWN,
    DEFAULT_STEP_BOUND_UP,
    DEFAULT_STOP_MODE,
    DEFAULT_STOP_THRESHOLD,
    DEFAULT_TRUNCATE_STAIRCASE,
    DEFAULT_ROUND_STEPS,
)

# (trial, issued value, response, is reversal)
ProgressionType = List[Tuple[int, float, int, bool]]


class InvalidParameter(ValueError):
    """Raised when a staircase cannot be constructed from the given parameters."""


class StaircaseWarning(UserWarning):
    """Issued when a call on a running staircase is ignored."""


class StopMode(Enum):
    TRIALS = 'trials'
    REVERSALS = 'reversals'


class TrialLog:
    """
    Append-only log with a logical length.

    Truncating only moves the length cursor; the next append overwrites the
    slot after it. Indexing and iteration see the first ``len(log)`` entries.
    """

    def __init__(self):
        self._values = []
        self._length = 0

    def __len__(self):
        return self._length

    def __getitem__(self, index):
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError("trial log index out of range")
        return self._values[index]

    def __iter__(self):
        return iter(self._values[:self._length])

    def append(self, value):
        if self._length < len(self._values):
            self._values[self._length] = value
        else:
            self._values.append(value)
        self._length += 1

    def truncate(self, length):
        self._length = max(0, min(length, self._length))

    def clear(self):
        self._length = 0

    def total(self, start=0):
        """Sum of the entries from ``start`` to the logical end."""
        return sum(self._values[start:self._length])

    def snapshot(self, dtype=float) -> np.ndarray:
        return np.array(self._values[:self._length], dtype=dtype)


@dataclass(frozen=True)
class StaircaseConfig:
    target_probability: float
    scale_constant: float
    start_value: float
    x_max: float = DEFAULT_X_MAX
    x_min: float = DEFAULT_X_MIN
    step_bound_down: float = DEFAULT_STEP_BOUND_DOWN
    step_bound_up: float = DEFAULT_STEP_BOUND_UP
    stop_mode: StopMode = StopMode(DEFAULT_STOP_MODE)
    stop_threshold: int = DEFAULT_STOP_THRESHOLD
    truncate_staircase: bool = DEFAULT_TRUNCATE_STAIRCASE
    round_steps: bool = DEFAULT_ROUND_STEPS


@dataclass
class StaircaseHistory:
    """Mutable trial record owned by a single staircase."""
    issued: TrialLog = field(default_factory=TrialLog)
    internal: TrialLog = field(default_factory=TrialLog)
    responses: TrialLog = field(default_factory=TrialLog)
    reversals: TrialLog = field(default_factory=TrialLog)
    reversal_count: int = 0
    trial_count: int = 1
    stopped: bool = False
    current_value: Optional[float] = None


def _is_number(value):
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def _is_binary(value):
    if isinstance(value, (bool, np.bool_)):
        return True
    return _is_number(value) and value in (0, 1)


def _round_half_away(value):
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    if math.isinf(value) or math.isnan(value):
        return value
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _warn(message, stacklevel=3):
    # Default stacklevel points at the caller of a public method
    warnings.warn(message, StaircaseWarning, stacklevel=stacklevel)


class StochasticApproximationStaircase:
    def __init__(self, target_probability, scale_constant, x_1, **options):
        """
        Initialize a SAS procedure and seed trial 1.

        Args:
            target_probability (float): Target response probability phi, in [0, 1].
            scale_constant (float): Step scale constant c.
            x_1 (float): Level of the first trial.
            **options: Optional keyword settings:
                x_max, x_min (float): Range of issued levels.
                step_bound_down, step_bound_up (float): Largest downward and
                    upward move per trial, as non-negative magnitudes.
                stop_mode (str or StopMode): 'trials' or 'reversals'.
                stop_threshold (int): Trial or reversal count at which to stop.
                truncate_staircase (bool): Clip the internal staircase level
                    as well as the issued level.
                round_steps (bool): Round each step to the nearest integer.
                start_value (float): Overrides x_1.

        Raises:
            InvalidParameter: If phi, c or x_1 is not numeric, or phi is
                outside [0, 1].

        Unknown or malformed options issue a StaircaseWarning and are ignored.
        """
        start_value = options.pop('start_value', x_1)
        for name, value in (('target_probability', target_probability),
                            ('scale_constant', scale_constant),
                            ('start_value', start_value)):
            if not _is_number(value):
                raise InvalidParameter(f"{name} must be numeric, got {value!r}")
        if not 0 <= target_probability <= 1:
            raise InvalidParameter("target_probability must be between 0 and 1")

        settings = self._parse_options(options)
        self.config = StaircaseConfig(
            target_probability=float(target_probability),
            scale_constant=float(scale_constant),
            start_value=float(start_value),
            **settings
        )
        self._update_rule = default_update_rule
        self.history = StaircaseHistory()
        self._seed()

    @staticmethod
    def _parse_options(options):
        """Validate keyword options, dropping unknown or malformed ones with a warning."""
        settings = {}
        for name, value in options.items():
            if name in ('x_max', 'x_min'):
                if _is_number(value) and not math.isnan(value):
                    settings[name] = float(value)
                else:
                    _warn(f"{name} must be numeric, got {value!r}. Ignored.", stacklevel=4)
            elif name in ('step_bound_down', 'step_bound_up'):
                if _is_number(value) and value >= 0:
                    settings[name] = float(value)
                else:
                    _warn(f"{name} must be a non-negative number, got {value!r}. Ignored.", stacklevel=4)
            elif name == 'stop_mode':
                try:
                    settings[name] = StopMode(value.lower() if isinstance(value, str) else value)
                except ValueError:
                    _warn(f"stop_mode must be 'trials' or 'reversals', got {value!r}. Ignored.", stacklevel=4)
            elif name == 'stop_threshold':
                if _is_number(value) and value > 0 and float(value).is_integer():
                    settings[name] = int(value)
                else:
                    _warn(f"stop_threshold must be a positive integer, got {value!r}. Ignored.", stacklevel=4)
            elif name in ('truncate_staircase', 'round_steps'):
                if _is_binary(value):
                    settings[name] = bool(value)
                else:
                    _warn(f"{name} must be True, False, 0 or 1, got {value!r}. Ignored.",
                          stacklevel=4)
            else:
                _warn(f"{name} is not a valid option. Ignored.", stacklevel=4)

        x_max = settings.get('x_max', DEFAULT_X_MAX)
        x_min = settings.get('x_min', DEFAULT_X_MIN)
        if x_min > x_max:
            _warn(f"x_min ({x_min}) is greater than x_max ({x_max}). Range ignored.", stacklevel=4)
            settings.pop('x_max', None)
            settings.pop('x_min', None)
        return settings

    def _clip(self, value):
        """Clip a level to [x_min, x_max]."""
        return max(min(value, self.config.x_max), self.config.x_min)

    def _seed(self):
        """Discard all trials and seed trial 1 from the start value."""
        history = self.history
        for log in (history.issued, history.internal, history.responses, history.reversals):
            log.clear()

        first = self._clip(self.config.start_value)
        history.issued.append(first)
        history.internal.append(first if self.config.truncate_staircase
                                else self.config.start_value)
        history.reversal_count = 0
        history.trial_count = 1
        history.stopped = False
        history.current_value = first

    def update(self, response):
        """
        Record the response to the current trial and compute the next level.

        Args:
            response (bool or int): 1/True for a positive response, 0/False
                otherwise. Other values are ignored with a warning, as are
                calls made after the staircase has stopped.
        """
        if not _is_binary(response):
            _warn(f"Response must be True, False, 0 or 1, got {response!r}. Ignored.")
            return
        history = self.history
        if history.stopped:
            _warn(f"Staircase stopped after {history.trial_count} trials; "
                  "call reset() or backstep() to continue. Ignored.")
            return

        config = self.config
        response = int(response)

        # The first trial is compared against itself
        previous = history.responses[-1] if len(history.responses) else response
        is_reversal = int(response != previous)
        n_reversals = history.reversals.total() + is_reversal

        try:
            step = self._update_rule(config.target_probability, config.scale_constant,
                                     n_reversals, response)
        except Exception as err:
            _warn(f"Update rule failed with {type(err).__name__}: {err}. Ignored.")
            return
        if not _is_number(step) or math.isnan(step):
            _warn(f"Update rule must return a number, got {step!r}. Ignored.")
            return
        # Down bound is held as a negative so one clamp covers both directions
        step = min(max(-step, -config.step_bound_down), config.step_bound_up)
        if config.round_steps:
            step = _round_half_away(step)

        next_raw = history.internal[-1] - step
        next_value = self._clip(next_raw)

        history.responses.append(response)
        history.reversals.append(is_reversal)
        history.reversal_count = history.reversals.total()
        history.issued.append(next_value)
        history.internal.append(next_value if config.truncate_staircase else next_raw)

        if config.stop_mode is StopMode.TRIALS:
            history.stopped = history.trial_count == config.stop_threshold
        else:
            history.stopped = history.reversal_count == config.stop_threshold

        if history.stopped:
            history.current_value = None
        else:
            history.trial_count += 1
            history.current_value = history.issued[-1]

    def reset(self):
        """Return to trial 1, keeping the configuration and update rule."""
        self._seed()

    def backstep(self, n_trials=1):
        """
        Delete the last ``n_trials`` completed trials.

        Requests to delete ``trial_count`` or more trials, or a count that is
        not a positive integer, are ignored with a warning. Once stopped this
        keeps at least the first completed trial.
        """
        if not (_is_number(n_trials) and float(n_trials).is_integer() and n_trials >= 1):
            _warn(f"Number of trials to delete must be a positive integer, got {n_trials!r}. Ignored.")
            return
        n_trials = int(n_trials)
        history = self.history

        if n_trials >= history.trial_count:
            _warn(f"Cannot delete {n_trials} trials at trial {history.trial_count}. Ignored.")
            return
        # trial_count stops advancing once the staircase has stopped
        completed = history.trial_count if history.stopped else history.trial_count - 1

        remaining = completed - n_trials
        if remaining == 0:
            self._seed()
            return

        history.reversal_count -= history.reversals.total(start=remaining)
        history.responses.truncate(remaining)
        history.reversals.truncate(remaining)
        history.issued.truncate(remaining + 1)
        history.internal.truncate(remaining + 1)
        history.trial_count = remaining + 1
        history.stopped = False
        history.current_value = history.issued[-1]

    def set_update_function(self, func: UpdateRule):
        """
        Replace the update rule.

        ``func`` must take four positional arguments ``(phi, c, m, response)``
        and return the step magnitude, e.g.
        ``lambda phi, c, m, response: c * (response - phi) / (2 + m)``.
        Anything else is ignored with a warning.
        """
        if not accepts_four_arguments(func):
            _warn("The update function must take 4 arguments (phi, c, m, response). Ignored.")
            return
        self._update_rule = func

    @property
    def update_rule(self) -> UpdateRule:
        return self._update_rule

    @property
    def trial_count(self) -> int:
        """Number of the next trial, or of the last trial once stopped."""
        return self.history.trial_count

    @property
    def stopped(self) -> bool:
        return self.history.stopped

    @property
    def current_value(self) -> Optional[float]:
        """Level to present on the next trial; None once stopped."""
        return self.history.current_value

    @property
    def reversal_count(self) -> int:
        return self.history.reversal_count

    @property
    def issued_values(self) -> np.ndarray:
        """Levels issued to the experiment, trial 1 first."""
        return self.history.issued.snapshot()

    @property
    def staircase_values(self) -> np.ndarray:
        """Unclipped staircase levels (equal to issued_values when truncating)."""
        return self.history.internal.snapshot()

    @property
    def responses(self) -> np.ndarray:
        return self.history.responses.snapshot(dtype=int)

    @property
    def reversals(self) -> np.ndarray:
        return self.history.reversals.snapshot(dtype=int)

    @property
    def reversal_values(self) -> np.ndarray:
        """Issued levels of the trials that were reversals."""
        levels = self.issued_values[:len(self.history.reversals)]
        return levels[self.reversals.astype(bool)]

    @property
    def progression(self) -> ProgressionType:
        """(trial, level, response, reversal) for every completed trial."""
        history = self.history
        return [(i + 1, history.issued[i], response, bool(reversal))
                for i, (response, reversal) in enumerate(zip(history.responses,
                                                             history.reversals))]

    def __repr__(self):
        state = 'stopped' if self.stopped else 'running'
        return (f"{type(self).__name__}(phi={self.config.target_probability}, "
                f"c={self.config.scale_constant}, trial={self.trial_count}, "
                f"reversals={self.reversal_count}, {state})")
