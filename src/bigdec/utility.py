# -----------------------------------------------------------------------------
#  Errors, settings helpers and terminal helpers
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
import shutil
import sys
from enum import IntFlag

from bigdec.runtime import CFG


class UserInputError(Exception):
    pass


# --- Arithmetic error taxonomy -----------------------------------------------

class ErrorFlag(IntFlag):
    NONE = 0
    DIV_ZERO = 1
    DOMAIN = 2


SENTINELS = {
    ErrorFlag.DIV_ZERO: "#DIV/0",
    ErrorFlag.DOMAIN: "#DOMAIN",
}


class ParseError(UserInputError, ValueError):
    """Malformed decimal string (empty, stray characters, lone sign)."""


class DivisionByZero(UserInputError, ZeroDivisionError):
    flag = ErrorFlag.DIV_ZERO


class DomainError(UserInputError, ArithmeticError):
    """Operation undefined for its operands (negative modulo operand, negative exponent)."""
    flag = ErrorFlag.DOMAIN


class DigitLimitError(UserInputError):
    pass


def sentinel_for(flag: ErrorFlag) -> str:
    if ErrorFlag.DIV_ZERO in flag:
        return SENTINELS[ErrorFlag.DIV_ZERO]
    if ErrorFlag.DOMAIN in flag:
        return SENTINELS[ErrorFlag.DOMAIN]
    return ""


def error_for_flag(flag: ErrorFlag, message: str) -> UserInputError:
    """Exception instance matching an error flag (DIV_ZERO wins when both are set)."""
    if ErrorFlag.DIV_ZERO in flag:
        return DivisionByZero(message)
    if ErrorFlag.DOMAIN in flag:
        return DomainError(message)
    raise ValueError(f"no error recorded in flag {flag!r}")


# --- Settings helpers ---------------------------------------------------------

def cfg_choice(key: str, choices: tuple[str, ...], default: str) -> str:
    """Read a string setting and check it against the allowed (lower-case) values."""
    val = str(CFG(key, default)).strip().lower()
    if val not in choices:
        raise UserInputError(
            f"setting {key} must be one of {', '.join(choices)} (got {val!r})."
        )
    return val


def digit_limit() -> int | None:
    """
    Effective decimal-digit limit from BEHAVIOUR.MAX_DIGITS.

    Returns None when the limit is disabled (0, negative or not a number).
    """
    raw = CFG("BEHAVIOUR.MAX_DIGITS", 100_000)
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return None
    return limit if limit > 0 else None


def check_digit_limit(ndigits: int, label: str = "result") -> None:
    limit = digit_limit()
    if limit is not None and ndigits > limit:
        raise DigitLimitError(
            f"{label} has more than {limit} decimal digits. "
            "Increase the limit in the profile or pass a smaller value."
        )


# --- Terminal ----------------------------------------------------------------

def clear_screen() -> None:
    """Clear the console before the REPL banner (scrollback included on POSIX)."""
    if os.name == "nt":
        os.system("cls")
        return
    sys.stdout.write("\033[3J\033[H\033[2J")
    sys.stdout.flush()


def terminal_columns(fallback: int = 80) -> int:
    return shutil.get_terminal_size((fallback, 24)).columns


def flatten_dotted(tables: dict, prefix: str = "") -> dict[str, object]:
    """{"A": {"B": 1}} -> {"A.B": 1}, the keys CFG() understands."""
    flat: dict[str, object] = {}
    for name, value in (tables or {}).items():
        key = f"{prefix}.{name}" if prefix else str(name)
        if isinstance(value, dict):
            flat.update(flatten_dotted(value, key))
        else:
            flat[key] = value
    return flat
