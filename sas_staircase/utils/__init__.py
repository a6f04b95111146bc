"""
Utility module for common functions and constants.

This module contains:
- Default values and constants
"""

from .defaults import *

__all__ = []  # Constants are re-exported through the star import
