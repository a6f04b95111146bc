"""
Update rules for the stochastic approximation staircase.

An update rule maps ``(phi, c, m, response)`` to a step magnitude, where
``phi`` is the target probability, ``c`` the scale constant and ``m`` the
number of reversals recorded so far.
"""
import inspect
from typing import Callable

UpdateRule = Callable[[float, float, int, int], float]

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def default_update_rule(phi, c, m, response):
    """Robbins-Monro step with the reversal-count acceleration: c*(response-phi)/(1+m)."""
    return c * (response - phi) / (1 + m)


def accepts_four_arguments(func) -> bool:
    """
    Check that ``func`` is callable with exactly four positional arguments.

    Variadic signatures and required keyword-only parameters are rejected, as
    are callables whose signature cannot be inspected.
    """
    if not callable(func):
        return False
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False

    positional = 0
    for param in signature.parameters.values():
        if param.kind in _POSITIONAL_KINDS:
            positional += 1
        elif param.kind == inspect.Parameter.KEYWORD_ONLY:
            if param.default is inspect.Parameter.empty:
                return False
        else:
            return False
    return positional == 4
