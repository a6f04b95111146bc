"""
Procedures module for adaptive threshold estimation.

This module contains implementations of:
- Stochastic Approximation Staircase (SAS) procedure
- Update rules for the SAS step size
"""

from .sas import (
    InvalidParameter,
    StaircaseWarning,
    StochasticApproximationStaircase,
    StopMode,
)
from .update_rules import default_update_rule

__all__ = [
    "InvalidParameter",
    "StaircaseWarning",
    "StochasticApproximationStaircase",
    "StopMode",
    "default_update_rule"
]
