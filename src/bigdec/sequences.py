# -----------------------------------------------------------------------------
#  sequences.py
#  Integer sequences computed with BigInt arithmetic
# -----------------------------------------------------------------------------

from __future__ import annotations

from bigdec.bigint import BigInt
from bigdec.runtime import CFG
from bigdec.utility import DomainError, UserInputError


def _argument(n: int | BigInt, name: str) -> int:
    """Validate a sequence index: non-negative and within SEQUENCES.MAX_N."""
    if isinstance(n, bool) or not isinstance(n, (int, BigInt)):
        raise TypeError(f"{name}() argument must be an integer, not {type(n).__name__}")
    k = int(n)
    if k < 0:
        raise DomainError(f"{name}() requires a non-negative integer (got {k})")
    limit = int(CFG("SEQUENCES.MAX_N", 2000))
    if limit > 0 and k > limit:
        raise UserInputError(
            f"{name}({k}) exceeds SEQUENCES.MAX_N = {limit}. "
            "Increase the limit in the profile or pass a smaller value."
        )
    return k


def factorial(n: int | BigInt) -> BigInt:
    """n! by repeated BigInt multiplication."""
    k = _argument(n, "fact")
    result = BigInt(1)
    for i in range(2, k + 1):
        result *= i
    return result


def _bell_rows(n: int):
    """
    Yield the first entry of each row of the Bell triangle: B(0), B(1), ..., B(n).

    Each row starts with the last entry of the previous row; every next entry is
    the sum of its left neighbour and the entry above that neighbour.
    """
    row = [BigInt(1)]
    yield row[0]
    for _ in range(n):
        nxt = [row[-1]]
        for above in row:
            nxt.append(nxt[-1] + above)
        row = nxt
        yield row[0]


def bell(n: int | BigInt) -> BigInt:
    """Bell number B(n): number of partitions of an n-element set."""
    k = _argument(n, "bell")
    *_, last = _bell_rows(k)
    return last


def bell_numbers(n: int | BigInt) -> list[BigInt]:
    """[B(1), ..., B(n)]."""
    k = _argument(n, "bell")
    return list(_bell_rows(k))[1:]


def _pentagonal_offsets(k: int):
    """Yield (offset, sign) for the generalized pentagonal numbers up to k."""
    j = 1
    while True:
        sign = 1 if j % 2 else -1
        first = j * (3 * j - 1) // 2
        if first > k:
            return
        yield first, sign
        second = j * (3 * j + 1) // 2
        if second <= k:
            yield second, sign
        j += 1


def partition_count(n: int | BigInt) -> BigInt:
    """
    p(n), the number of integer partitions of n, via Euler's pentagonal
    number recurrence:

        p(k) = sum_{j>=1} (-1)^(j+1) * (p(k - j(3j-1)/2) + p(k - j(3j+1)/2))
    """
    k = _argument(n, "p")
    table = [BigInt(1)]
    for m in range(1, k + 1):
        total = BigInt(0)
        for offset, sign in _pentagonal_offsets(m):
            if sign > 0:
                total += table[m - offset]
            else:
                total -= table[m - offset]
        table.append(total)
    return table[k]
