from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("bigdec")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .bigint import BigInt
from .config import has_profile, load_settings, read_current_profile
from .expreval import evaluate
from .runtime import APPLY, CFG
from .sequences import bell, bell_numbers, factorial, partition_count
from .utility import (
    DigitLimitError,
    DivisionByZero,
    DomainError,
    ErrorFlag,
    ParseError,
    UserInputError,
)
from .workspace import workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "BigInt",
    "DigitLimitError",
    "DivisionByZero",
    "DomainError",
    "ErrorFlag",
    "ParseError",
    "UserInputError",
    "__version__",
    "bell",
    "bell_numbers",
    "evaluate",
    "factorial",
    "has_profile",
    "load_settings",
    "partition_count",
    "read_current_profile",
    "workspace_dir",
]
