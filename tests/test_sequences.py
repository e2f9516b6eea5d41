# tests/test_sequences.py
"""
Sequence functions checked against sympy.

Run: pytest -v
"""

from __future__ import annotations

import pytest
import sympy

from bigdec import BigInt, DomainError, UserInputError, bell, bell_numbers, factorial, partition_count
from bigdec.runtime import APPLY

# ---------- helpers -----------------------------------------------------------


def _as_int(value: BigInt) -> int:
    assert isinstance(value, BigInt)
    return int(value)


# ---------- factorial ---------------------------------------------------------


@pytest.mark.parametrize("n", [0, 1, 2, 5, 10, 25, 100, 300])
def test_factorial_matches_sympy(n):
    assert _as_int(factorial(n)) == int(sympy.factorial(n))


def test_factorial_accepts_bigint_argument():
    assert factorial(BigInt("5")).to_string() == "120"


# ---------- bell --------------------------------------------------------------


@pytest.mark.parametrize("n", [0, 1, 2, 3, 4, 10, 30, 75])
def test_bell_matches_sympy(n):
    assert _as_int(bell(n)) == int(sympy.bell(n))


def test_bell_numbers_list():
    assert [x.to_string() for x in bell_numbers(5)] == ["1", "2", "5", "15", "52"]
    assert bell_numbers(0) == []


# ---------- partitions --------------------------------------------------------


@pytest.mark.parametrize("n", [0, 1, 2, 5, 10, 50, 200])
def test_partition_count_matches_sympy(n):
    assert _as_int(partition_count(n)) == int(sympy.partition(n))


def test_partition_count_known_value():
    assert partition_count(100).to_string() == "190569292"


# ---------- argument checks ---------------------------------------------------


@pytest.mark.parametrize("fn", [factorial, bell, bell_numbers, partition_count])
def test_negative_argument_is_domain_error(fn):
    with pytest.raises(DomainError):
        fn(-1)


@pytest.mark.parametrize("fn", [factorial, bell, partition_count])
@pytest.mark.parametrize("arg", [2.0, "5", True], ids=["float", "str", "bool"])
def test_non_integer_argument(fn, arg):
    with pytest.raises(TypeError):
        fn(arg)


def test_max_n_setting():
    APPLY({"SEQUENCES": {"MAX_N": 10}})
    assert factorial(10).to_string() == "3628800"
    with pytest.raises(UserInputError, match="MAX_N"):
        factorial(11)
    with pytest.raises(UserInputError, match="MAX_N"):
        partition_count(BigInt("11"))
