"""Constants and default values for the SAS staircase."""

# Range of values that may be issued to the experiment
DEFAULT_X_MAX = float('inf')
DEFAULT_X_MIN = float('-inf')

# Largest move allowed per trial, as non-negative magnitudes
DEFAULT_STEP_BOUND_DOWN = float('inf')
DEFAULT_STEP_BOUND_UP = float('inf')

# Stop criterion
DEFAULT_STOP_MODE = 'trials'
DEFAULT_STOP_THRESHOLD = 50

# Staircase behaviour
DEFAULT_TRUNCATE_STAIRCASE = True
DEFAULT_ROUND_STEPS = True

# Simulated observer default parameters
DEFAULT_SLOPE = 0.2
DEFAULT_GUESS_RATE = 0.01
DEFAULT_LAPSE_RATE = 0.01
MAX_SIMULATED_TRIALS = 500
