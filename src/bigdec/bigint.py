# -----------------------------------------------------------------------------
#  bigint.py
#  Arbitrary-precision signed decimal integers
# -----------------------------------------------------------------------------
"""
BigInt: sign-magnitude integer stored as decimal digits (least significant first).

Instances are immutable; every operator returns a new value. Arithmetic is done
digit by digit in bigdec.digits, the way it is done by hand.

    Exponent       (**, ^)  binary: O(log M) multiplications, repeated: O(M)
    Multiplication (*)      O(n*m)
    Division       (/)      long: O(n*m), subtract: O(quotient)
    Modulus        (%)      same as division
    Addition       (+)      O(max(n, m))
    Subtraction    (-)      O(max(n, m))

where n and m are the digit counts of the operands and M the exponent value.

Division rounds the quotient magnitude half-up (7 / 2 == 4, -7 / 2 == -4);
it is not Python's floor division. Modulo is only defined when both operands
are non-negative.

Errors (division by zero, domain violations) either raise or, with
ARITHMETIC.ON_ERROR = "flag", produce an invalid BigInt that shows a sentinel
(#DIV/0, #DOMAIN) and raises as soon as it is used again.
"""

from __future__ import annotations

import re
from functools import total_ordering

from bigdec import digits as dg
from bigdec.runtime import CFG
from bigdec.utility import (
    ErrorFlag,
    ParseError,
    cfg_choice,
    check_digit_limit,
    error_for_flag,
    sentinel_for,
)

_DECIMAL_RE = re.compile(r"-?[0-9]+")

# log10(2) rounded down: 30103 / 100000
_LOG10_2_NUM = 30103
_LOG10_2_DEN = 100000


def _error_mode() -> str:
    return cfg_choice("ARITHMETIC.ON_ERROR", ("raise", "flag"), "raise")


def _power_digits_lower_bound(base_len: int, exponent: int) -> int:
    """
    Cheap lower bound on the digit count of b**e for |b| >= 2.

    A base of L digits is at least 10**(L-1); a one-digit base is at least 2.
    """
    if base_len > 1:
        return (base_len - 1) * exponent + 1
    return 1 + (exponent * _LOG10_2_NUM) // _LOG10_2_DEN


@total_ordering
class BigInt:
    __slots__ = ("_digits", "_positive", "_errors", "_text")

    def __init__(self, value: str | int | BigInt = 0):
        self._errors = ErrorFlag.NONE
        self._text: str | None = None

        if isinstance(value, BigInt):
            self._digits = value._digits
            self._positive = value._positive
            self._errors = value._errors
            self._text = value._text
            return

        if isinstance(value, bool):
            raise TypeError("BigInt() does not accept bool")

        if isinstance(value, int):
            self._positive = value >= 0
            self._digits = dg.digits_from_int(-value if value < 0 else value)
        elif isinstance(value, str):
            if not _DECIMAL_RE.fullmatch(value):
                raise ParseError(f"Invalid input: {value!r} is not a decimal integer.")
            negative = value.startswith("-")
            self._digits = dg.digits_from_str(value[1:] if negative else value)
            self._positive = not negative
        else:
            raise TypeError(f"BigInt() argument must be str, int or BigInt, not {type(value).__name__}")

        if dg.is_zero(self._digits):
            self._positive = True

    # --- internal constructors ---------------------------------------------

    @classmethod
    def _from_parts(cls, digits: list[int], positive: bool) -> BigInt:
        obj = cls.__new__(cls)
        obj._digits = digits
        obj._positive = positive or dg.is_zero(digits)
        obj._errors = ErrorFlag.NONE
        obj._text = None
        return obj

    @classmethod
    def _invalid(cls, flag: ErrorFlag) -> BigInt:
        obj = cls._from_parts([0], True)
        obj._errors = flag
        return obj

    @staticmethod
    def _fail(flag: ErrorFlag, message: str) -> BigInt:
        if _error_mode() == "flag":
            return BigInt._invalid(flag)
        raise error_for_flag(flag, message)

    def _check(self) -> None:
        if self._errors:
            raise error_for_flag(
                self._errors, f"operand is invalid ({sentinel_for(self._errors)})"
            )

    def _coerce(self, other: object) -> BigInt | None:
        """BigInt or native int -> valid BigInt; anything else -> None (NotImplemented)."""
        if isinstance(other, BigInt):
            rhs = other
        elif isinstance(other, int) and not isinstance(other, bool):
            rhs = BigInt(other)
        else:
            return None
        self._check()
        rhs._check()
        return rhs

    # --- queries -----------------------------------------------------------

    def is_valid(self) -> bool:
        return not self._errors

    @property
    def error(self) -> ErrorFlag:
        return self._errors

    def is_positive(self) -> bool:
        """True for zero and positive values."""
        return self._positive

    @property
    def digits(self) -> tuple[int, ...]:
        """Decimal digits, least significant first."""
        self._check()
        return tuple(self._digits)

    @property
    def num_digits(self) -> int:
        self._check()
        return len(self._digits)

    # --- display -----------------------------------------------------------

    def abs_string(self) -> str:
        """Magnitude as a decimal string (the sentinel for invalid values)."""
        if self._errors:
            return sentinel_for(self._errors)
        if self._text is None:
            self._text = dg.digits_to_str(self._digits)
        return self._text

    def to_string(self) -> str:
        text = self.abs_string()
        if self._positive or self._errors:
            return text
        return "-" + text

    def to_scientific(self, width: int | None = None) -> str:
        """
        '<first width digits>e+<remaining digit count>' when the magnitude is
        longer than `width`, else the plain decimal string. width <= 0 disables
        truncation; None reads DISPLAY.SCI_WIDTH.
        """
        if width is None:
            width = int(CFG("DISPLAY.SCI_WIDTH", 0) or 0)
        text = self.abs_string()
        if self._errors or width <= 0 or len(text) <= width:
            return self.to_string()
        body = f"{text[:width]}e+{len(text) - width}"
        return body if self._positive else "-" + body

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        if self._errors:
            return f"BigInt(<{sentinel_for(self._errors)}>)"
        return f"BigInt('{self.to_string()}')"

    # --- conversions -------------------------------------------------------

    def __int__(self) -> int:
        self._check()
        value = dg.digits_to_int(self._digits)
        return value if self._positive else -value

    def __bool__(self) -> bool:
        self._check()
        return not dg.is_zero(self._digits)

    def __hash__(self) -> int:
        return hash(int(self))

    # --- comparison --------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self.to_string() == rhs.to_string()

    def __lt__(self, other: object) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        if self._positive != rhs._positive:
            return not self._positive
        order = dg.compare_magnitudes(self._digits, rhs._digits)
        # Larger magnitude means smaller value when both are negative.
        return order < 0 if self._positive else order > 0

    # --- unary -------------------------------------------------------------

    def __neg__(self) -> BigInt:
        self._check()
        return BigInt._from_parts(self._digits, not self._positive)

    def __pos__(self) -> BigInt:
        self._check()
        return self

    def __abs__(self) -> BigInt:
        self._check()
        return BigInt._from_parts(self._digits, True)

    def increment(self) -> BigInt:
        return self + 1

    def decrement(self) -> BigInt:
        return self - 1

    # --- addition / subtraction --------------------------------------------

    def _add_signed(self, digits: list[int], positive: bool) -> BigInt:
        """
        self + (±digits).

        Same signs add the magnitudes and keep the sign. Different signs
        subtract the smaller magnitude from the larger one, and the result
        takes the sign of the larger.
        """
        if self._positive == positive:
            return BigInt._from_parts(dg.add_magnitudes(self._digits, digits), positive)
        if dg.compare_magnitudes(self._digits, digits) >= 0:
            return BigInt._from_parts(dg.subtract_magnitudes(self._digits, digits), self._positive)
        return BigInt._from_parts(dg.subtract_magnitudes(digits, self._digits), positive)

    def __add__(self, other: object) -> BigInt:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._add_signed(rhs._digits, rhs._positive)

    __radd__ = __add__

    def __sub__(self, other: object) -> BigInt:
        # a - b == a + (-b): different signs add magnitudes with the sign of a;
        # same signs subtract and flip the sign when |b| > |a|.
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._add_signed(rhs._digits, not rhs._positive)

    def __rsub__(self, other: object) -> BigInt:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    # --- multiplication ----------------------------------------------------

    def __mul__(self, other: object) -> BigInt:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        if dg.is_zero(self._digits) or dg.is_zero(rhs._digits):
            return BigInt._from_parts([0], True)

        positive = self._positive == rhs._positive
        if dg.is_one(rhs._digits):
            return BigInt._from_parts(self._digits, positive)
        if dg.is_one(self._digits):
            return BigInt._from_parts(rhs._digits, positive)

        check_digit_limit(len(self._digits) + len(rhs._digits) - 1, "product")
        return BigInt._from_parts(dg.multiply_magnitudes(self._digits, rhs._digits), positive)

    __rmul__ = __mul__

    # --- exponentiation ----------------------------------------------------

    def __pow__(self, other: object) -> BigInt:
        exp = self._coerce(other)
        if exp is None:
            return NotImplemented
        if not exp._positive:
            return BigInt._fail(ErrorFlag.DOMAIN, "negative exponents are not supported")
        if dg.is_zero(exp._digits):
            return BigInt._from_parts([1], True)

        odd_exponent = not dg.is_even(exp._digits)
        if dg.is_one(exp._digits) or dg.is_zero(self._digits):
            return self
        if dg.is_one(self._digits):
            return BigInt._from_parts([1], self._positive or not odd_exponent)

        check_digit_limit(
            _power_digits_lower_bound(len(self._digits), int(exp)), "power"
        )
        method = cfg_choice("ARITHMETIC.POWER_METHOD", ("binary", "repeated"), "binary")
        if method == "binary":
            mag = dg.power_binary(self._digits, exp._digits)
        else:
            mag = dg.power_repeated(self._digits, exp._digits)
        return BigInt._from_parts(mag, self._positive or not odd_exponent)

    def __rpow__(self, other: object) -> BigInt:
        base = self._coerce(other)
        if base is None:
            return NotImplemented
        return base ** self

    # Calculator notation: a ^ b is exponentiation, not XOR.
    __xor__ = __pow__
    __rxor__ = __rpow__

    # --- division / modulo -------------------------------------------------

    def _divmod_magnitudes(self, rhs: BigInt) -> tuple[list[int], list[int]]:
        method = cfg_choice("ARITHMETIC.DIVISION_METHOD", ("long", "subtract"), "long")
        if method == "long":
            return dg.divmod_long(self._digits, rhs._digits)
        return dg.divmod_subtract(self._digits, rhs._digits)

    def __truediv__(self, other: object) -> BigInt:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        if dg.is_zero(rhs._digits):
            return BigInt._fail(ErrorFlag.DIV_ZERO, "division by zero")
        if dg.is_zero(self._digits):
            return BigInt._from_parts([0], True)

        positive = self._positive == rhs._positive
        if dg.is_one(rhs._digits):
            return BigInt._from_parts(self._digits, positive)

        quotient, rem = self._divmod_magnitudes(rhs)
        # Round half up: a remainder of at least half the divisor bumps the magnitude.
        if not dg.is_zero(rem) and dg.compare_magnitudes(dg.add_magnitudes(rem, rem), rhs._digits) >= 0:
            quotient = dg.add_magnitudes(quotient, [1])
        return BigInt._from_parts(quotient, positive)

    def __rtruediv__(self, other: object) -> BigInt:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs / self

    def __mod__(self, other: object) -> BigInt:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        if not self._positive or not rhs._positive:
            return BigInt._fail(ErrorFlag.DOMAIN, "modulo is only defined for non-negative operands")
        if dg.is_zero(rhs._digits):
            return BigInt._fail(ErrorFlag.DIV_ZERO, "modulo by zero")
        if dg.is_zero(self._digits) or dg.is_one(rhs._digits):
            return BigInt._from_parts([0], True)
        if dg.compare_magnitudes(self._digits, rhs._digits) < 0:
            return self

        _, rem = self._divmod_magnitudes(rhs)
        return BigInt._from_parts(rem, True)

    def __rmod__(self, other: object) -> BigInt:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs % self


__all__ = ["BigInt"]
