# tests/test_fmt.py
from __future__ import annotations

import pytest

from bigdec import BigInt
from bigdec.fmt import abbr_digits, format_digit_count, format_value, strip_ansi
from bigdec.runtime import APPLY


@pytest.mark.parametrize(
    "text,expected",
    [
        ("1234567890", "1234567890"),
        ("12345678901234567890", "123…890"),
        ("-12345678901234567890", "-123…890"),
    ],
)
def test_abbr_digits(text, expected):
    assert abbr_digits(text, head=3, tail=3, threshold=12) == expected


def test_format_value_modes():
    value = BigInt("2") ** 100
    assert format_value(value) == "1267650600228229401496703205376"
    assert format_value(value, width=4) == "1267e+27"

    APPLY({"FORMATTING": {"NUM_ABBR_ENABLED": True, "NUM_ABBR_HEAD": 2, "NUM_ABBR_TAIL": 2,
                          "NUM_ABBR_THRESHOLD": 10, "ELLIPSIS": "..."}})
    assert format_value(value) == "12...76"


def test_format_invalid_value():
    APPLY({"ARITHMETIC": {"ON_ERROR": "flag"}})
    bad = BigInt("-1") % BigInt("2")
    assert strip_ansi(format_value(bad)) == "#DOMAIN"
    assert strip_ansi(format_digit_count(bad)) == "invalid (DOMAIN)"


def test_format_digit_count():
    assert format_digit_count(BigInt("-120")) == "3 digit(s), negative"
    assert format_digit_count(BigInt("0")) == "1 digit(s), non-negative"
