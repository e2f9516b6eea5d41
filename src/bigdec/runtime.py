# runtime.py
from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Runtime:
    """Settings of the active profile plus the session's debug switch."""
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # [debug] lines and tracebacks

    def apply(self, settings: Any) -> None:
        """Install a config.Settings or a plain nested dict."""
        if hasattr(settings, "as_dict") and callable(settings.as_dict):
            self.profile_name = getattr(settings, "name", None) or "default"
            self.settings = dict(settings.as_dict())
        else:
            self.profile_name = "default"
            self.settings = dict(settings or {})

        # BEHAVIOUR.DEBUG = true turns debug on; a session flag is never switched off
        if self.get("BEHAVIOUR.DEBUG") is True:
            self.debug = True

    def get(self, key: str, default: Any = None) -> Any:
        """Dotted lookup: 'ARITHMETIC.DIVISION_METHOD' -> settings['ARITHMETIC']['DIVISION_METHOD']."""
        cur: Any = self.settings
        for part in (key or "").split("."):
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("bigdec_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


@contextmanager
def scoped(settings: Any = None) -> Iterator[Runtime]:
    """Run a block against a fresh Runtime; the previous one is restored on exit."""
    rt = Runtime()
    rt.apply(settings)
    token = _current_runtime.set(rt)
    try:
        yield rt
    finally:
        _current_runtime.reset(token)


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)
