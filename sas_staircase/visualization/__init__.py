"""
Visualization module for staircase results.

This module contains functions for:
- Plotting staircase trajectories with responses and reversals
- Printing trial-by-trial progressions
"""

from .staircase_plotting import *

__all__ = []  # Functions are re-exported through the star import
