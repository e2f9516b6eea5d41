# src/bigdec/fmt.py
from __future__ import annotations

import re

from colorama import Fore, Style

from bigdec.bigint import BigInt
from bigdec.runtime import CFG

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str) -> str:
    return ANSI_RE.sub("", s)


def abbr_digits(text: str, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate a long decimal string as first<head>…last<tail>; keeps the sign."""
    sign = "-" if text.startswith("-") else ""
    body = text[1:] if sign else text
    if len(body) <= threshold or head + tail >= len(body):
        return text
    return f"{sign}{body[:head]}{ellipsis}{body[-tail:]}"


def format_value(value: BigInt, *, width: int | None = None) -> str:
    """
    Render a result for the console.

    - invalid values: the sentinel in red
    - width > 0 (or DISPLAY.SCI_WIDTH): <first width digits>e+<rest>
    - FORMATTING.NUM_ABBR_ENABLED: head…tail abbreviation
    - otherwise every digit
    """
    if not value.is_valid():
        return f"{Fore.RED}{Style.BRIGHT}{value}{Style.RESET_ALL}"

    if width is None:
        width = int(CFG("DISPLAY.SCI_WIDTH", 0) or 0)
    if width > 0:
        return value.to_scientific(width)

    text = value.to_string()
    if CFG("FORMATTING.NUM_ABBR_ENABLED", False):
        return abbr_digits(
            text,
            int(CFG("FORMATTING.NUM_ABBR_HEAD", 10)),
            int(CFG("FORMATTING.NUM_ABBR_TAIL", 10)),
            int(CFG("FORMATTING.NUM_ABBR_THRESHOLD", 35)),
            CFG("FORMATTING.ELLIPSIS", "…"),
        )
    return text


def format_digit_count(value: BigInt) -> str:
    if not value.is_valid():
        return f"{Fore.RED}invalid ({value.error.name}){Style.RESET_ALL}"
    sign = "negative" if not value.is_positive() else "non-negative"
    return f"{value.num_digits} digit(s), {sign}"
