"""
test_update_rules.py
--------------------

Tests for the default update rule and for replacing it on a staircase.
"""

import functools

import pytest

from sas_staircase.procedures import StaircaseWarning, default_update_rule
from sas_staircase.procedures.update_rules import accepts_four_arguments


class TestDefaultRule:
    @pytest.mark.parametrize("m, response, expected", [
        (0, 1, 4.5),
        (1, 0, -12.75),
        (4, 1, 0.9),
    ])
    def test_values(self, m, response, expected):
        assert default_update_rule(0.85, 30, m, response) == pytest.approx(expected)


class TestSignatureCheck:
    def test_four_argument_callables(self):
        class Rule:
            def __call__(self, phi, c, m, response):
                return 0.0

        assert accepts_four_arguments(lambda phi, c, m, response: 0.0)
        assert accepts_four_arguments(default_update_rule)
        assert accepts_four_arguments(Rule())
        assert accepts_four_arguments(lambda phi, c, m, response, *, scale=1: 0.0)

    @pytest.mark.parametrize("func", [
        "not callable",
        None,
        lambda phi, c, m: 0.0,
        lambda phi, c, m, response, extra: 0.0,
        lambda *args: 0.0,
        lambda phi, c, m, response, **kwargs: 0.0,
        lambda phi, c, m, response, *, scale: 0.0,
        max,
    ])
    def test_rejected(self, func):
        assert not accepts_four_arguments(func)

    def test_partial_with_four_remaining(self):
        def rule(offset, phi, c, m, response):
            return c * (response - phi) / (offset + m)

        assert accepts_four_arguments(functools.partial(rule, 2))


class TestSetUpdateFunction:
    def test_custom_rule_is_used(self, staircase):
        staircase.set_update_function(lambda phi, c, m, response: c * (response - phi) / (2 + m))
        staircase.update(1)
        assert staircase.current_value == pytest.approx(102.25)

    def test_rule_receives_reversal_count(self, staircase):
        calls = []

        def rule(phi, c, m, response):
            calls.append((phi, c, m, response))
            return 0.0

        staircase.set_update_function(rule)
        for response in [1, 0, 0, 1]:
            staircase.update(response)
        assert calls == [(0.85, 30.0, 0, 1), (0.85, 30.0, 1, 0),
                         (0.85, 30.0, 1, 0), (0.85, 30.0, 2, 1)]

    @pytest.mark.parametrize("func", ["rule", lambda phi, c: 0.0])
    def test_malformed_rule_is_ignored(self, staircase, func):
        with pytest.warns(StaircaseWarning, match="4 arguments"):
            staircase.set_update_function(func)
        assert staircase.update_rule is default_update_rule
        staircase.update(1)
        assert staircase.current_value == pytest.approx(104.5)
