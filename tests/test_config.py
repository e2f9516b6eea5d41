# tests/test_config.py
"""
Profiles, workspace seeding and runtime settings.

Run: pytest -v
"""

from __future__ import annotations

import pytest

import bigdec.config as CONFIG
from bigdec import BigInt, UserInputError
from bigdec.runtime import APPLY, CFG
from bigdec.runtime import current as _rt_current
from bigdec.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir

# ---------- helpers -----------------------------------------------------------


def _write_profile(name: str, body: str) -> None:
    root, _ = seed_workspace()
    (root / "profiles" / f"{name}.toml").write_text(body, encoding="utf-8")


# ---------- workspace ---------------------------------------------------------


def test_workspace_follows_env(tmp_path):
    assert workspace_dir() == (tmp_path / "workspace").resolve()


def test_seeding_copies_packaged_profiles_once():
    root, seeded, copied = ensure_workspace_seeded()
    assert seeded
    assert copied["profiles"] >= 2
    assert (root / "profiles" / "default.toml").is_file()
    assert (root / "profiles" / "classic.toml").is_file()

    _, seeded_again, copied_again = ensure_workspace_seeded()
    assert not seeded_again
    assert copied_again["profiles"] == 0


def test_seeding_keeps_user_edits_unless_overwriting():
    _write_profile("default", '[PROFILE]\nname = "default"\ndescription = "edited"\n')
    ensure_workspace_seeded()
    assert CONFIG.load_settings("default").description == "edited"

    seed_workspace(overwrite=True)
    assert CONFIG.load_settings("default").description != "edited"


# ---------- loading -----------------------------------------------------------


def test_default_profile_values():
    ensure_workspace_seeded()
    s = CONFIG.load_settings("default")
    assert s.name == "default"
    assert "PROFILE" not in s.as_dict()
    APPLY(s)
    assert CFG("ARITHMETIC.DIVISION_METHOD") == "long"
    assert CFG("ARITHMETIC.POWER_METHOD") == "binary"
    assert CFG("ARITHMETIC.ON_ERROR") == "raise"
    assert CFG("BEHAVIOUR.MAX_DIGITS") == 100000
    assert CFG("DISPLAY.SCI_WIDTH") == 0
    assert _rt_current().profile_name == "default"


def test_classic_profile_flags_errors():
    ensure_workspace_seeded()
    APPLY(CONFIG.load_settings("classic"))
    assert CFG("ARITHMETIC.DIVISION_METHOD") == "subtract"
    assert CFG("ARITHMETIC.POWER_METHOD") == "repeated"
    bad = BigInt("1") / BigInt("0")
    assert str(bad) == "#DIV/0"
    assert (BigInt("123") ^ BigInt("4")).to_string() == "228886641"


def test_choices_are_normalized():
    _write_profile("loud", '[ARITHMETIC]\nDIVISION_METHOD = " Subtract "\nON_ERROR = "FLAG"\n')
    s = CONFIG.load_settings("loud")
    assert s.name == "loud"
    assert s.description == "(no description)"
    assert s.data["ARITHMETIC"] == {"DIVISION_METHOD": "subtract", "ON_ERROR": "flag"}


@pytest.mark.parametrize(
    "body,needle",
    [
        ('[ARITHMETIC]\nPOWER_METHOD = "fast"\n', "ARITHMETIC.POWER_METHOD must be one of binary, repeated"),
        ('[BEHAVIOUR]\nMAX_DIGITS = "lots"\n', "BEHAVIOUR.MAX_DIGITS must be an integer"),
        ("[SEQUENCES]\nMAX_N = true\n", "SEQUENCES.MAX_N must be an integer"),
        ("[ARITHMETIC\n", "reading broken.toml"),
    ],
    ids=["bad-choice", "bad-integer", "bool-integer", "malformed"],
)
def test_invalid_profiles(body, needle):
    _write_profile("broken", body)
    with pytest.raises(UserInputError) as exc:
        CONFIG.load_settings("broken")
    assert needle in str(exc.value)


def test_missing_profile():
    ensure_workspace_seeded()
    assert not CONFIG.has_profile("nope")
    with pytest.raises(UserInputError, match="Profile 'nope' not found"):
        CONFIG.load_settings("nope")


def test_listing_profiles():
    _write_profile("broken", "[ARITHMETIC\n")
    assert {"default", "classic", "broken"} <= set(CONFIG.list_all_profiles())
    described = dict(CONFIG.list_profiles_with_descriptions())
    assert described["broken"] == "(unreadable profile)"
    assert described["default"] == "Long division, binary powers, errors raised"


def test_current_profile_roundtrip():
    ensure_workspace_seeded()
    assert CONFIG.read_current_profile() is None
    CONFIG.write_current_profile("classic.toml")
    assert CONFIG.read_current_profile() == "classic"


# ---------- runtime -----------------------------------------------------------


def test_runtime_dotted_lookup_and_debug_sync():
    APPLY({"BEHAVIOUR": {"DEBUG": True, "MAX_DIGITS": 7}, "TOP": 1})
    rt = _rt_current()
    assert rt.debug is True
    assert CFG("BEHAVIOUR.MAX_DIGITS") == 7
    assert CFG("TOP") == 1
    assert CFG("BEHAVIOUR.MISSING", "fallback") == "fallback"
    assert CFG("NOPE.DEEPER.KEY") is None


def test_runtime_profile_does_not_switch_session_debug_off():
    rt = _rt_current()
    rt.debug = True
    APPLY({"BEHAVIOUR": {"DEBUG": False}})
    assert rt.debug is True


@pytest.mark.parametrize("name", ["../escape", "sub/default", "..", "/tmp/default"])
def test_profile_names_with_paths_are_rejected(name):
    root, _ = seed_workspace()
    (root / "escape.toml").write_text('[PROFILE]\nname = "escape"\n', encoding="utf-8")
    assert not CONFIG.has_profile(name)
    with pytest.raises(UserInputError, match="not a profile name"):
        CONFIG.load_settings(name)
