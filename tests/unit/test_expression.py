"""Unit tests for the arithmetic expression evaluator"""

import pytest
from interest_calc.domain.expression import evaluate
from interest_calc.domain.exceptions import EvaluationError


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_blank_input_is_zero(text):
    """Clearing a field means zero, not an error"""
    assert evaluate(text) == 0.0


@pytest.mark.parametrize(
    "text,expected",
    [
        ("2+2", 4.0),
        ("7", 7.0),
        ("1.5 * 4", 6.0),
        ("(1 + 2) * 3", 9.0),
        ("-3 + 5", 2.0),
        ("+4", 4.0),
        ("1/2", 0.5),
        ("2^10", 1024.0),
        ("2**3", 8.0),
        ("7 % 3", 1.0),
        ("  12 - 2  ", 10.0),
    ],
)
def test_arithmetic(text, expected):
    assert evaluate(text) == expected


def test_result_is_always_float():
    """Integer-looking expressions still produce floats"""
    assert isinstance(evaluate("3"), float)
    assert isinstance(evaluate("6 / 3"), float)


@pytest.mark.parametrize(
    "text",
    [
        "2+",
        "(1 + 2",
        "1..2",
        "x + 1",
        "abs(1)",
        "1 < 2",
        "True",
        "'7'",
        "[1]",
        "USD",
    ],
)
def test_malformed_or_unsupported_input_raises(text):
    with pytest.raises(EvaluationError):
        evaluate(text)


def test_division_by_zero_raises():
    with pytest.raises(EvaluationError, match="Division by zero"):
        evaluate("1/0")


def test_overflow_raises():
    with pytest.raises(EvaluationError):
        evaluate("10^400")


def test_complex_result_raises():
    """A negative base with a fractional power has no real answer"""
    with pytest.raises(EvaluationError):
        evaluate("(-8)^(1/3)")


def test_huge_integer_literal_raises():
    with pytest.raises(EvaluationError):
        evaluate("9" * 400)


def test_substituted_literals_evaluate():
    """Output of currency substitution is plain arithmetic"""
    assert evaluate("100 * (0.5)") == 50.0
