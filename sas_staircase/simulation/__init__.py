"""
Simulation module for staircase runs.

This module contains functions and classes for:
- Simulating observer responses with a psychometric function
- Running a staircase to completion against a simulated observer
"""

from .response_model import ObserverResponseModel
from .runner import simulate_staircase

__all__ = ["ObserverResponseModel", "simulate_staircase"]
