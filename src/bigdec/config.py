# src/bigdec/config.py
"""
Arithmetic profiles.

A profile is <workspace>/profiles/<name>.toml. The optional [PROFILE] table
carries the display name and a one-line description; every other table is
handed to the runtime as-is, after the switches the arithmetic reads have been
checked.
"""

from __future__ import annotations

import tomllib as toml
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from bigdec.utility import UserInputError
from bigdec.workspace import ensure_workspace_seeded, workspace_dir

DEFAULT_PROFILE = "default"
_CURRENT_MARKER = ".current"

# Allowed values for the string switches, checked when a profile is loaded.
CHOICES: dict[tuple[str, str], tuple[str, ...]] = {
    ("ARITHMETIC", "DIVISION_METHOD"): ("long", "subtract"),
    ("ARITHMETIC", "POWER_METHOD"): ("binary", "repeated"),
    ("ARITHMETIC", "ON_ERROR"): ("raise", "flag"),
}
INTEGERS = {
    ("BEHAVIOUR", "MAX_DIGITS"),
    ("SEQUENCES", "MAX_N"),
    ("DISPLAY", "SCI_WIDTH"),
    ("FORMATTING", "NUM_ABBR_HEAD"),
    ("FORMATTING", "NUM_ABBR_TAIL"),
    ("FORMATTING", "NUM_ABBR_THRESHOLD"),
}


@dataclass
class Settings:
    """One loaded profile: its tables (minus [PROFILE]), name, description and file."""
    data: dict[str, Any]
    name: str
    description: str
    source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


def _profile_path(name: str) -> Path:
    return workspace_dir() / "profiles" / f"{name}.toml"


def _read_profile_file(path: Path) -> dict[str, Any]:
    try:
        return toml.loads(path.read_text(encoding="utf-8"))
    except toml.TOMLDecodeError as e:
        pos = []
        if getattr(e, "lineno", None) is not None:
            pos.append(f"line {e.lineno}")
        if getattr(e, "colno", None) is not None:
            pos.append(f"column {e.colno}")
        where = f" (at {', '.join(pos)})" if pos else ""
        raise UserInputError(f"reading {path.name}: {getattr(e, 'msg', e)}{where}.") from None
    except OSError as e:
        raise UserInputError(f"reading {path.name}: {e.strerror or e}.") from None


def _meta(raw: dict[str, Any], stem: str) -> tuple[dict[str, Any], str, str]:
    """Split off [PROFILE]: (tables, name, description)."""
    meta = raw.get("PROFILE") or {}
    tables = {k: v for k, v in raw.items() if k != "PROFILE"}
    description = " ".join(str(meta.get("description") or "").split())
    return tables, str(meta.get("name") or stem), description or "(no description)"


def _validate(data: dict[str, Any], source: str) -> dict[str, Any]:
    """Normalize known switches to lower-case and reject values the arithmetic cannot use."""
    for (section, key), allowed in CHOICES.items():
        table = data.get(section)
        if not isinstance(table, dict) or key not in table:
            continue
        val = str(table[key]).strip().lower()
        if val not in allowed:
            raise UserInputError(
                f"{source}: {section}.{key} must be one of {', '.join(allowed)} (got {table[key]!r})."
            )
        table[key] = val

    for section, key in INTEGERS:
        table = data.get(section)
        if not isinstance(table, dict) or key not in table:
            continue
        val = table[key]
        if isinstance(val, bool) or not isinstance(val, int):
            raise UserInputError(f"{source}: {section}.{key} must be an integer (got {val!r}).")
    return data


# --- Public API ------------------------------------------------------------

def list_all_profiles() -> list[str]:
    ensure_workspace_seeded()
    return sorted(p.stem for p in (workspace_dir() / "profiles").glob("*.toml"))


def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    """(name, description) pairs; files that fail to parse are listed as unreadable."""
    out: list[tuple[str, str]] = []
    for stem in list_all_profiles():
        try:
            _, name, description = _meta(_read_profile_file(_profile_path(stem)), stem)
        except UserInputError:
            name, description = stem, "(unreadable profile)"
        out.append((name, description))
    return sorted(out, key=lambda item: item[0].lower())


def _is_profile_name(name: str) -> bool:
    # bare file stems only: no separators, no ".."
    return bool(name) and Path(name).name == name and name not in {".", ".."}


def has_profile(name: str) -> bool:
    return _is_profile_name(name) and _profile_path(name).is_file()


def load_settings(name: str | None = None) -> Settings:
    """Read, validate and wrap a profile; a missing one is a UserInputError."""
    if name and not _is_profile_name(name):
        raise UserInputError(f"'{name}' is not a profile name (no paths allowed).")
    path = _profile_path(name or DEFAULT_PROFILE)
    if not path.is_file():
        raise UserInputError(f"Profile '{name or DEFAULT_PROFILE}' not found at {path}")

    data, resolved, description = _meta(_read_profile_file(path), path.stem)
    return Settings(_validate(data, path.name), resolved, description, path)


# --- Last used profile -----------------------------------------------------

def _marker() -> Path:
    pdir = workspace_dir() / "profiles"
    pdir.mkdir(parents=True, exist_ok=True)
    return pdir / _CURRENT_MARKER


def read_current_profile() -> str | None:
    try:
        text = _marker().read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return text.removesuffix(".toml") or None


def write_current_profile(name: str) -> None:
    _marker().write_text((name or "").strip().removesuffix(".toml"), encoding="utf-8")
