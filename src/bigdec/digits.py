# -----------------------------------------------------------------------------
#  digits.py
#  Magnitude primitives on decimal digit lists
# -----------------------------------------------------------------------------
"""
Everything here works on *magnitudes*: lists of single decimal digits stored
least-significant digit first, so 1203 is ``[3, 0, 2, 1]``.

The arithmetic functions return fresh lists and leave their arguments alone.
Only the helpers documented as "in place" (``strip_leading_zeros`` and
``borrow_from_higher``) touch the list they are given.
"""

from __future__ import annotations

BASE = 10

# Chunk size used when converting to/from native ints (10**18 fits a machine word).
_CHUNK_DIGITS = 18
_CHUNK = BASE ** _CHUNK_DIGITS


# --- Conversion ---------------------------------------------------------------

def digits_from_str(text: str) -> list[int]:
    """'1203' -> [3, 0, 2, 1]. Caller validates that text is all ASCII digits."""
    out = [ord(ch) - 48 for ch in reversed(text)]
    return strip_leading_zeros(out or [0])


def digits_to_str(digits: list[int]) -> str:
    return "".join(map(str, reversed(digits)))


def digits_from_int(n: int) -> list[int]:
    """Magnitude of a non-negative native int, without going through str()."""
    if n < 0:
        raise ValueError("digits_from_int() expects a non-negative integer")
    out: list[int] = []
    while n:
        n, chunk = divmod(n, _CHUNK)
        for _ in range(_CHUNK_DIGITS):
            chunk, d = divmod(chunk, BASE)
            out.append(d)
    return strip_leading_zeros(out or [0])


def digits_to_int(digits: list[int]) -> int:
    text = digits_to_str(digits)
    head = len(text) % _CHUNK_DIGITS or _CHUNK_DIGITS
    value = int(text[:head])
    for i in range(head, len(text), _CHUNK_DIGITS):
        value = value * _CHUNK + int(text[i:i + _CHUNK_DIGITS])
    return value


# --- Small predicates -----------------------------------------------------------

def strip_leading_zeros(digits: list[int]) -> list[int]:
    """Drop most-significant zero digits in place (keeps one digit). Returns the list."""
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
    return digits


def is_zero(digits: list[int]) -> bool:
    return len(digits) == 1 and digits[0] == 0


def is_one(digits: list[int]) -> bool:
    return len(digits) == 1 and digits[0] == 1


def is_even(digits: list[int]) -> bool:
    return digits[0] % 2 == 0


def compare_magnitudes(a: list[int], b: list[int]) -> int:
    """Return -1, 0 or 1. Longer wins; equal lengths compare from the top digit down."""
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    for x, y in zip(reversed(a), reversed(b)):
        if x != y:
            return -1 if x < y else 1
    return 0


# --- Addition / subtraction -----------------------------------------------------

def add_magnitudes(a: list[int], b: list[int]) -> list[int]:
    """Digit-wise addition with carry; the result may be one digit longer."""
    out: list[int] = []
    carry = 0
    for i in range(max(len(a), len(b))):
        total = carry
        if i < len(a):
            total += a[i]
        if i < len(b):
            total += b[i]
        out.append(total % BASE)   # bring down
        carry = total // BASE
    if carry:
        out.append(carry)
    return strip_leading_zeros(out)


def borrow_from_higher(digits: list[int], pos: int) -> int:
    """
    Resolve a borrow for position `pos`, in place.

    Scans upward for the nearest nonzero digit above `pos`, takes one from it
    and turns every zero in between into BASE-1:

        pos        nonzero
         v           v
        [x, 0, 0, 3]  ->  [x, 9, 9, 2]

    The caller adds BASE to digits[pos]. Returns the index that was decremented.
    Raises ValueError when there is nothing to borrow from.
    """
    j = pos + 1
    while j < len(digits) and digits[j] == 0:
        j += 1
    if j >= len(digits):
        raise ValueError("borrow past the most significant digit (lhs < rhs)")
    digits[j] -= 1
    for k in range(pos + 1, j):
        digits[k] = BASE - 1
    return j


def subtract_magnitudes(a: list[int], b: list[int]) -> list[int]:
    """a - b for magnitudes with a >= b."""
    out = list(a)
    for i, sub in enumerate(b):
        if i >= len(out):
            raise ValueError("subtract_magnitudes() requires a >= b")
        diff = out[i] - sub
        if diff < 0:
            borrow_from_higher(out, i)
            diff += BASE
        out[i] = diff
    # Positions above len(b) only change through borrows, already applied.
    return strip_leading_zeros(out)


# --- Multiplication -------------------------------------------------------------

def multiply_magnitudes(a: list[int], b: list[int]) -> list[int]:
    """
    Schoolbook long multiplication into a single buffer of len(a) + len(b) slots.

    For each digit of `a` (outer, slow pointer) the row of partial products with
    `b` is added into the buffer at offset i. Two carries run along the row:
    the product carry (tens of digit*digit) and the sum carry from adding into
    the buffer. Whatever is left after the row lands in the next free slot,
    which nothing has written yet.
    """
    buffer = [0] * (len(a) + len(b))
    for i, x in enumerate(a):
        if x == 0:
            continue
        prod_carry = 0
        sum_carry = 0
        pos = i
        for y in b:
            prod = x * y + prod_carry
            total = buffer[pos] + prod % BASE + sum_carry
            buffer[pos] = total % BASE
            sum_carry = total // BASE
            prod_carry = prod // BASE
            pos += 1
        buffer[pos] = prod_carry + sum_carry
    return strip_leading_zeros(buffer)


# --- Division -------------------------------------------------------------------

def divmod_subtract(a: list[int], b: list[int]) -> tuple[list[int], list[int]]:
    """
    (a div b, a mod b) by repeated subtraction of b.

    O(quotient) subtractions: only usable for small quotients.
    """
    if is_zero(b):
        raise ZeroDivisionError("divmod_subtract() by zero")
    quotient = [0]
    rem = list(a)
    while compare_magnitudes(rem, b) >= 0:
        rem = subtract_magnitudes(rem, b)
        quotient = add_magnitudes(quotient, [1])
    return quotient, rem


def divmod_long(a: list[int], b: list[int]) -> tuple[list[int], list[int]]:
    """(a div b, a mod b) by schoolbook long division, one quotient digit per step."""
    if is_zero(b):
        raise ZeroDivisionError("divmod_long() by zero")
    quotient: list[int] = []
    rem = [0]
    for d in reversed(a):
        rem = strip_leading_zeros([d, *rem])    # rem * BASE + d
        q = 0
        while compare_magnitudes(rem, b) >= 0:  # at most BASE-1 rounds
            rem = subtract_magnitudes(rem, b)
            q += 1
        quotient.append(q)
    quotient.reverse()
    return strip_leading_zeros(quotient), rem


def halve(digits: list[int]) -> tuple[list[int], bool]:
    """Return (digits // 2, was_odd), working top-down on the decimal digits."""
    out: list[int] = []
    rem = 0
    for d in reversed(digits):
        cur = rem * BASE + d
        out.append(cur // 2)
        rem = cur % 2
    out.reverse()
    return strip_leading_zeros(out), rem == 1


# --- Exponentiation -------------------------------------------------------------

def power_binary(base: list[int], exponent: list[int]) -> list[int]:
    """Square-and-multiply; the exponent is halved on its own decimal digits."""
    result = [1]
    square = list(base)
    exp = list(exponent)
    while not is_zero(exp):
        exp, odd = halve(exp)
        if odd:
            result = multiply_magnitudes(result, square)
        if not is_zero(exp):
            square = multiply_magnitudes(square, square)
    return result


def power_repeated(base: list[int], exponent: list[int]) -> list[int]:
    """
    Place-value repeated multiplication.

    Walks the exponent digits from the most significant one: the accumulator is
    raised to the BASE-th power (BASE-1 multiplications by itself), then
    multiplied by `base` once per unit of the current digit.
    """
    result = [1]
    for d in reversed(exponent):
        if not is_one(result):
            acc = result
            for _ in range(BASE - 1):
                acc = multiply_magnitudes(acc, result)
            result = acc
        for _ in range(d):
            result = multiply_magnitudes(result, base)
    return result
