"""
SAS Staircase - Stochastic Approximation Staircase for adaptive threshold estimation
"""

__version__ = "0.1.0"

# Import main classes and functions for easy access
from .procedures.sas import (
    InvalidParameter,
    StaircaseWarning,
    StochasticApproximationStaircase,
    StopMode,
)
from .simulation.response_model import ObserverResponseModel
from .simulation.runner import simulate_staircase

__all__ = [
    "InvalidParameter",
    "StaircaseWarning",
    "StochasticApproximationStaircase",
    "StopMode",
    "ObserverResponseModel",
    "simulate_staircase"
]
