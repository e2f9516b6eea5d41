# src/bigdec/cli.py

"""
bigdec - arbitrary-precision decimal integer calculator

Description:
    Evaluates integer expressions with the BigInt type: + - * / % and ^ (or **),
    postfix factorial n!, and the sequence functions fact(n), bell(n), p(n).
    Division rounds the quotient half up; modulo needs non-negative operands.

usage: see bigdec -h
"""

from __future__ import annotations

import argparse
import os
import platform
import sys
import textwrap
import time
import traceback
from typing import NamedTuple

from colorama import Fore, Style
from colorama import init as colorama_init

import bigdec.config as CONFIG
from bigdec import __version__ as _ver
from bigdec.bigint import BigInt
from bigdec.expreval import evaluate
from bigdec.fmt import format_digit_count, format_value
from bigdec.runtime import APPLY, CFG
from bigdec.runtime import current as _rt_current
from bigdec.utility import (
    UserInputError,
    clear_screen,
    flatten_dotted,
    terminal_columns,
)
from bigdec.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir


# In memory session history
class HistoryItem(NamedTuple):
    expr: str
    result: str
    profile: str | None
    timestamp: float


_HISTORY: list[HistoryItem] = []
_TWO_ARGS = 2


def add_to_history(expr: str, result: BigInt, profile: str | None = None) -> None:
    _HISTORY.append(HistoryItem(expr=expr, result=str(result), profile=profile, timestamp=time.time()))


def get_history() -> list[HistoryItem]:
    return list(_HISTORY)


def clear_history() -> None:
    _HISTORY.clear()


def _debug(msg: str) -> None:
    if _rt_current().debug:
        print(f"{Fore.CYAN}[debug]{Style.RESET_ALL} {msg}", file=sys.stderr)


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    if msg.startswith("Invalid input:"):
        msg = msg.replace("Invalid input:", f"{Fore.RED}Invalid input:{Style.RESET_ALL}", 1)
    else:
        msg = f"{Fore.RED}Error:{Style.RESET_ALL} {msg}"
    print(msg, file=sys.stderr)


def _apply_profile(name: str) -> CONFIG.Settings:
    selected = CONFIG.load_settings(name)
    APPLY(selected)  # install into runtime
    _debug(f"active profile: {selected.name}")
    if selected.source:
        _debug(f"profile file: {selected.source}")
    if _rt_current().debug:
        flat = flatten_dotted(selected.as_dict())
        for k in sorted(flat, key=str.lower):
            v = CFG(k, None)
            _debug(f"  {k:.<40} {v!r} ({type(v).__name__})")
    return selected


def _select_profile_name(explicit: str | None) -> str:
    """
    Precedence:
      1) explicit profile argument
      2) last used (from workspace)
      3) 'default'
    """
    if explicit:
        return explicit
    last = CONFIG.read_current_profile()
    if last and CONFIG.has_profile(last):
        return last
    return "default"


def _resolve_inputs(items: list[str]) -> tuple[str | None, str | None]:
    """Return (profile, expression) from the positionals.

    The first item is a profile when a profile of that name exists; the rest
    is joined into one expression.
    """
    if not items:
        return None, None
    first = items[0]
    if CONFIG.has_profile(first):
        rest = " ".join(items[1:]).strip()
        return first, (rest or None)
    return None, " ".join(items)


def _evaluate_and_print(expr: str, *, width: int | None, quiet: bool, profile: str | None) -> BigInt:
    t0 = time.perf_counter()
    value = evaluate(expr)
    elapsed = time.perf_counter() - t0
    _debug(f"evaluated in {elapsed:.4f}s, {format_digit_count(value)}")
    shown = format_value(value, width=width)
    print(shown)
    if not quiet and value.is_valid() and shown != value.to_string():
        print(f"{Style.DIM}({format_digit_count(value)}){Style.RESET_ALL}")
    add_to_history(expr, value, profile)
    return value


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      init
          Create the workspace and copy the packaged profiles if missing.

      init overwrite
          Meant for developers. Requires environment variable BIGDEC_DEV=1.
          Copies all packaged profiles over your edited ones.

      active
          Show the profile that was used last.

      where
          Show the workspace path.

    examples:
      bigdec "123 ^ 4"
      bigdec classic "10 / 0"
      bigdec --width 20 "100!"
    """)

    p = argparse.ArgumentParser(
        prog="bigdec",
        description="Arbitrary-precision decimal integer calculator",
        usage=(
            "bigdec [[profile] expression] [--width N] [--quiet] [--debug]\n"
            "       bigdec -h | --help\n"
            "       bigdec init [overwrite] | active | where\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="[profile] expression",
                   help="optional profile name followed by an expression to evaluate")
    p.add_argument("--width", type=int, default=None,
                   help="Show results as <first N digits>e+<rest> (overrides DISPLAY.SCI_WIDTH)")
    p.add_argument("--quiet", action="store_true", help="Print the bare result only")
    p.add_argument("--debug", action="store_true", help="Show timings, settings and full tracebacks")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = "--debug" in (argv if argv is not None else sys.argv)
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _configure_text_streams() -> None:
    # Respect explicit user choice
    if os.environ.get("PYTHONIOENCODING"):
        return
    # Only touch redirected output (pipes/files), leave TTY as-is
    if sys.stdout.isatty() or not hasattr(sys.stdout, "reconfigure"):
        return
    enc = (sys.stdout.encoding or "").lower()
    if platform.system() == "Windows" or enc in ("", "ascii", "us-ascii"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
        sys.stderr.reconfigure(encoding="utf-8", errors="replace")


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)
    _configure_text_streams()

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()
    rt.debug = bool(args.debug)

    if args.width is not None and args.width < 0:
        parser.error("--width must be >= 0")

    ensure_workspace_seeded()

    # --- commands ---
    if args.items and args.items[0] in {"init", "active", "where"}:
        return _run_command(args.items)

    profile, expr = _resolve_inputs(args.items)
    profile_name = _select_profile_name(profile)
    if not CONFIG.has_profile(profile_name):
        profile_name = "default"
    _apply_profile(profile_name)

    # --- one-shot expression path ---
    if expr is not None:
        value = _evaluate_and_print(expr, width=args.width, quiet=args.quiet, profile=profile_name)
        return 0 if value.is_valid() else 3

    if profile:
        CONFIG.write_current_profile(profile_name)

    return _repl(profile_name, width=args.width, quiet=args.quiet)


def _run_command(items: list[str]) -> int:
    cmd = items[0]
    if cmd == "active":
        print(f"Active profile: {CONFIG.read_current_profile() or 'default'}")
        return 0
    if cmd == "where":
        print(f"Workspace: {workspace_dir()}")
        return 0

    # init
    if len(items) == _TWO_ARGS and items[1] == "overwrite":
        if os.environ.get("BIGDEC_DEV") != "1":
            print("Refusing to overwrite: set BIGDEC_DEV=1 to enable developer overwrite.")
            return 2
        ws, copied = seed_workspace(overwrite=True)
        print(f"Workspace ready at: {ws} (overwrote existing files)")
        print(f"Copied -> profiles: {copied.get('profiles', 0)}")
        return 0

    ws, _seeded, copied = ensure_workspace_seeded()  # copy-if-missing
    print(f"Workspace ready at: {ws}")
    print(f"Copied -> profiles: {copied.get('profiles', 0)}")
    return 0


def _print_help() -> None:
    width = min(terminal_columns(), 100)
    text = textwrap.dedent("""\
    Enter an expression, e.g.  2^100 - 1,  50! / 48!,  bell(20) % 97,  (123 ^ 4) / 7
      operators  + - * / % ^ (or **), parentheses, unary minus, postfix !
      functions  fact(n)  bell(n)  p(n)
      notes      '/' rounds the quotient half up (7 / 2 = 4)
                 '%' needs non-negative operands

    Commands
      h, help            this help
      q, quit            leave
      hist               show this session's results
      p, profiles        list profiles; type a profile name to switch
      width N            scientific display width (0 = all digits)
      debug on|off       toggle timings and tracebacks
    """)
    for line in text.splitlines():
        print(line[:width])


def _repl(profile_name: str, *, width: int | None, quiet: bool) -> int:
    if not _rt_current().debug:
        clear_screen()
    print(f"{Fore.YELLOW}{Style.BRIGHT}bigdec v{_ver} - arbitrary-precision decimal integers{Style.RESET_ALL}")

    current_profile = profile_name
    while True:
        try:
            prompt = f"\nProfile: {current_profile} - Enter an expression, command or profile (h=Help, q=Quit): "
            user_input = input(prompt).strip()

            low = user_input.lower()
            if low in {"", "q", "quit"}:
                break

            if low in {"h", "help"}:
                _print_help()
                continue

            if low in {"p", "profiles"}:
                for name, desc in CONFIG.list_profiles_with_descriptions():
                    print(f"  {name:<16} {desc}")
                continue

            if low in {"hist", "history"}:
                hist = get_history()
                if not hist:
                    print("History is empty.")
                for item in hist:
                    ts = time.strftime("%H:%M:%S", time.localtime(item.timestamp))
                    print(f"{ts}  {item.expr} = {item.result}  profile={item.profile or '-'}")
                continue

            if low.startswith("width"):
                parts = low.split()
                if len(parts) == _TWO_ARGS and parts[1].isdigit():
                    width = int(parts[1])
                    print(f"Scientific width set to {width}." if width else "Showing all digits.")
                else:
                    print("Usage: WIDTH N   (0 shows all digits)")
                continue

            if low.startswith("debug"):
                parts = low.split()
                rt = _rt_current()
                if len(parts) == 1 or parts[1] == "status":
                    print(f"Debug is currently {'ON' if rt.debug else 'OFF'}.")
                elif parts[1] == "on":
                    rt.debug = True
                    print("Debug mode enabled for this session.")
                elif parts[1] == "off":
                    rt.debug = False
                    print("Debug mode disabled for this session.")
                else:
                    print("Usage: DEBUG [on|off|status]")
                continue

            # treat as profile switch
            if CONFIG.has_profile(user_input):
                _apply_profile(user_input)
                CONFIG.write_current_profile(user_input)  # remember
                current_profile = user_input
                print(f"Applied profile: {current_profile}")
                continue

            _evaluate_and_print(user_input, width=width, quiet=quiet, profile=current_profile)

        except UserInputError as e:
            _print_user_error(str(e))
        except (EOFError, KeyboardInterrupt):
            print()
            break
        except Exception as e:
            if _rt_current().debug:
                traceback.print_exc()
            else:
                _print_user_error(f"{e.__class__.__name__}: {e}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
