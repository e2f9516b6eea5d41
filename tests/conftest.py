# tests/conftest.py
from __future__ import annotations

import pytest

from bigdec.runtime import scoped


@pytest.fixture(autouse=True)
def isolated_runtime(tmp_path, monkeypatch):
    """Private workspace and an empty (all defaults) runtime for every test."""
    monkeypatch.setenv("BIGDEC_HOME", str(tmp_path / "workspace"))
    with scoped({}) as rt:
        yield rt
