# src/bigdec/workspace.py
"""
The user's workspace: $BIGDEC_HOME, else ~/.bigdec.

Packaged profiles are copied into <workspace>/profiles on first use so users can
edit them; existing files are left alone unless overwrite is requested.
"""

from __future__ import annotations

import os
import shutil
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path

SUBDIRS = ("profiles",)


def workspace_dir() -> Path:
    env = os.environ.get("BIGDEC_HOME")
    base = Path(env).expanduser() if env else Path.home() / ".bigdec"
    return base.resolve()


def _is_profile_file(p: Path) -> bool:
    # hidden and editor backup files stay behind
    return p.is_file() and p.suffix.lower() == ".toml" and not p.name.startswith(".")


def _copy_profiles(src: Path, dst: Path, *, overwrite: bool) -> int:
    count = 0
    if not src.is_dir():
        return 0
    for p in sorted(src.glob("*.toml")):
        if not _is_profile_file(p):
            continue
        target = dst / p.name
        if overwrite or not target.exists():
            shutil.copy2(p, target)
            count += 1
    return count


def seed_workspace(*, overwrite: bool = False) -> tuple[Path, dict[str, int]]:
    """
    Copy the packaged profiles into the workspace.

    overwrite=False copies missing files only; overwrite=True replaces edited
    ones (developer use, guarded in the CLI).

    Returns: (workspace_path, {subdir: files_copied})
    """
    root = workspace_dir()
    copied: dict[str, int] = {}
    for sub in SUBDIRS:
        dst = root / sub
        dst.mkdir(parents=True, exist_ok=True)
        with as_file(pkg_files("bigdec") / sub) as packaged:
            copied[sub] = _copy_profiles(Path(packaged), dst, overwrite=overwrite)
    return root, copied


def ensure_workspace_seeded() -> tuple[Path, bool, dict[str, int]]:
    root, copied = seed_workspace(overwrite=False)
    return root, any(copied.values()), copied
