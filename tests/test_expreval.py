# tests/test_expreval.py
"""
Tests for the safe expression evaluator.

Run: pytest -v
"""

from __future__ import annotations

import pytest

from bigdec import DigitLimitError, DivisionByZero, DomainError, UserInputError, evaluate
from bigdec.runtime import APPLY

# ---------- valid expressions -------------------------------------------------


@pytest.mark.parametrize(
    "expr,expected",
    [
        ("1 + 2 * 3", "7"),
        ("(1 + 2) * 3", "9"),
        ("2^3^2", "512"),
        ("2 ** 10", "1024"),
        ("-3 ^ 2", "-9"),
        ("(-3) ^ 2", "9"),
        ("7 / 2", "4"),
        ("-7 / 2", "-4"),
        ("15 % 4", "3"),
        ("5!", "120"),
        ("(2 + 3)!", "120"),
        ("bell(3)!", "120"),
        ("fact(6) / 5!", "6"),
        ("p(100)", "190569292"),
        ("bell(5) - 52", "0"),
        ("1_000 + 1", "1001"),
        ("2e3", "2000"),
        ("5E+2 - 1", "499"),
        ("0e9", "0"),
        ("007 + 1", "8"),
        ("999999999 * 999999999", "999999998000000001"),
        ("+4 - -4", "8"),
    ],
)
def test_evaluate(expr, expected):
    assert evaluate(expr).to_string() == expected


def test_literals_beyond_native_str_limit():
    literal = "9" * 5000
    value = evaluate(f"{literal} + 1")
    assert value.num_digits == 5001
    assert value.to_string() == "1" + "0" * 5000


def test_scientific_literal_expands_exactly():
    assert evaluate("1e30").to_string() == "1" + "0" * 30


# ---------- rejected input ----------------------------------------------------


@pytest.mark.parametrize(
    "expr",
    [
        "",
        "   ",
        "1 +",
        "x + 1",
        "_L0",
        "1.5 + 2",
        "0x10",
        "7 // 2",
        "abs(3)",
        "fact(3, 4)",
        "__import__('os')",
        "1__0",
        "10_",
        "!5",
        "3!!",
        "'12' + 1",
        "[1, 2]",
        "1 < 2",
    ],
)
def test_invalid_input(expr):
    with pytest.raises(UserInputError) as exc:
        evaluate(expr)
    assert str(exc.value).startswith("Invalid input:")


def test_too_many_nodes():
    expr = " + ".join(["1"] * 200)
    with pytest.raises(UserInputError, match="too large"):
        evaluate(expr)


# ---------- arithmetic errors propagate ---------------------------------------


@pytest.mark.parametrize(
    "expr,exc_type",
    [
        ("1 / 0", DivisionByZero),
        ("5 % 0", DivisionByZero),
        ("-15 % 4", DomainError),
        ("2 ^ -1", DomainError),
        ("fact(-1)", DomainError),
    ],
)
def test_arithmetic_errors_propagate(expr, exc_type):
    with pytest.raises(exc_type):
        evaluate(expr)


def test_flag_mode_yields_invalid_value():
    APPLY({"ARITHMETIC": {"ON_ERROR": "flag"}})
    value = evaluate("10 / (5 - 5)")
    assert not value.is_valid()
    assert str(value) == "#DIV/0"
    with pytest.raises(DivisionByZero):
        evaluate("1 / 0 + 1")


def test_literal_digit_limit():
    APPLY({"BEHAVIOUR": {"MAX_DIGITS": 20}})
    assert evaluate("1e19").num_digits == 20
    with pytest.raises(DigitLimitError):
        evaluate("1e20")
    with pytest.raises(DigitLimitError):
        evaluate("1" * 21)
