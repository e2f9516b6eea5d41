"""
Safe evaluation of arithmetic expressions over BigInt.

    12345678901234567890 * (3 - 7) ^ 2
    100! / 98!
    bell(30) % 1000
    2e40 + 1

Integer literals are lifted out of the text before Python's parser sees it, so
their size is bounded only by BEHAVIOUR.MAX_DIGITS (no native int conversion).
"""

from __future__ import annotations

import ast
import operator as op
import re

from bigdec.bigint import BigInt
from bigdec.sequences import bell, factorial, partition_count
from bigdec.utility import UserInputError, check_digit_limit

# ---- allowed operators (safe subset) ----
_ALLOWED_BINOPS = {
    ast.Add:  op.add,
    ast.Sub:  op.sub,
    ast.Mult: op.mul,
    ast.Div:  op.truediv,   # round-half-up division
    ast.Mod:  op.mod,
    ast.Pow:  op.pow,
}
_ALLOWED_UNARYOPS = {
    ast.UAdd: op.pos,
    ast.USub: op.neg,
}
_FUNCTIONS = {
    "fact": factorial,
    "bell": bell,
    "p": partition_count,
}

_MAX_NODES = 256  # sanity guard

# Decimal literal with optional underscores and optional non-negative exponent: 12, 1_000, 2e40, 5E+3
_LITERAL_RE = re.compile(
    r"""
    (?<![\w.])          # not immediately after a word char or dot
    (\d[\d_]*)          # mantissa
    (?:[eE]\+?(\d+))?   # optional exponent
    (?![\w.])           # not immediately before a word char or dot
    """,
    re.VERBOSE,
)
_LITERAL_PREFIX = "_L"
_FAKE_FACT = "fact"


class _ExprError(Exception):
    pass


def _lift_literals(expr: str) -> tuple[str, dict[str, BigInt]]:
    """
    Replace every decimal literal by a placeholder name (_L0, _L1, ...).

    Scientific literals expand exactly: 2e3 -> 2000. Returns the rewritten text
    and the placeholder -> BigInt map.
    """
    values: dict[str, BigInt] = {}

    def repl(m: re.Match) -> str:
        raw = m.group(1)
        if raw.endswith("_") or "__" in raw:
            raise _ExprError(f"misplaced '_' in literal {m.group(0)!r}")
        mantissa = raw.replace("_", "")
        exp = m.group(2)
        if exp is not None:
            zeros = int(exp)
            check_digit_limit(len(mantissa.lstrip("0") or "0") + zeros, "literal")
            if mantissa.strip("0"):
                mantissa += "0" * zeros
        else:
            check_digit_limit(len(mantissa.lstrip("0") or "0"), "literal")
        name = f"{_LITERAL_PREFIX}{len(values)}"
        values[name] = BigInt(mantissa)
        return name

    return _LITERAL_RE.sub(repl, expr), values


def _rewrite_factorial(expr: str) -> str:
    """
    Rewrite postfix factorial 'x!' into 'fact(x)'.

    Handles:
        5!
        (3+2)!

    Does NOT allow:
        !5         (no prefix factorial)
        3!!        (no double/nested factorial)
        (3!)!      (no factorial of factorial)
    """
    out: list[str] = []
    n = len(expr)
    pos = 0  # start of the next chunk to copy

    for i, ch in enumerate(expr):
        if ch != "!":
            continue

        # Find the operand to the left of '!'
        j = i - 1
        while j >= 0 and expr[j].isspace():
            j -= 1
        if j < 0:
            raise _ExprError("factorial '!' requires a left operand")

        if expr[j] == ")":
            level = 0
            k = j
            while k >= 0:
                if expr[k] == ")":
                    level += 1
                elif expr[k] == "(":
                    level -= 1
                    if level == 0:
                        break
                k -= 1
            if k < 0 or level != 0:
                raise _ExprError("unbalanced parentheses before '!'")
            # include a function name directly before '(' : bell(3)!
            while k > 0 and (expr[k - 1].isalnum() or expr[k - 1] == "_"):
                k -= 1
            operand_start = k
        else:
            if not (expr[j].isalnum() or expr[j] == "_"):
                raise _ExprError("factorial '!' has invalid left operand")
            k = j
            while k >= 0 and (expr[k].isalnum() or expr[k] == "_"):
                k -= 1
            operand_start = k + 1

        if operand_start < pos:
            raise _ExprError("nested factorial '!' is not supported")

        out.append(expr[pos:operand_start])
        out.append(f"{_FAKE_FACT}({expr[operand_start:j + 1]})")
        pos = i + 1

    if pos < n:
        out.append(expr[pos:])
    return "".join(out)


def _eval_tree(tree: ast.Expression, literals: dict[str, BigInt]) -> BigInt:
    def _eval(node) -> BigInt:
        if isinstance(node, ast.Expression):
            return _eval(node.body)

        if isinstance(node, ast.Name):
            if node.id in literals:
                return literals[node.id]
            raise _ExprError(f"unknown name '{node.id}'")

        if isinstance(node, ast.Constant):
            # Only hex/octal/binary or float literals survive the lifting pass.
            raise _ExprError("only decimal integer literals are allowed")

        if isinstance(node, ast.UnaryOp) and type(node.op) in _ALLOWED_UNARYOPS:
            return _ALLOWED_UNARYOPS[type(node.op)](_eval(node.operand))

        if isinstance(node, ast.BinOp):
            op_type = type(node.op)
            if op_type is ast.FloorDiv:
                raise _ExprError("use '/' for division (it rounds half up)")
            if op_type in _ALLOWED_BINOPS:
                return _ALLOWED_BINOPS[op_type](_eval(node.left), _eval(node.right))

        if isinstance(node, ast.Call):
            if isinstance(node.func, ast.Name) and node.func.id in _FUNCTIONS:
                if node.keywords or len(node.args) != 1:
                    raise _ExprError(f"{node.func.id}() takes exactly one argument")
                return _FUNCTIONS[node.func.id](_eval(node.args[0]))
            raise _ExprError("function calls are not allowed")

        raise _ExprError(f"unsupported syntax: {type(node).__name__}")

    return _eval(tree)


# ---- public entry point ----
def evaluate(text: str) -> BigInt:
    """
    Evaluate an expression to a BigInt.

    Raises UserInputError ("Invalid input: ...") for anything that is not a
    well-formed expression; arithmetic errors (DivisionByZero, DomainError,
    DigitLimitError) propagate unchanged.
    """
    s = (text or "").strip()
    if not s:
        raise UserInputError("Invalid input: empty expression.")
    if _LITERAL_PREFIX in s:
        raise UserInputError(f"Invalid input: names are not allowed in {s!r}.")

    try:
        expr, literals = _lift_literals(s)
        expr = expr.replace("^", "**")
        expr = _rewrite_factorial(expr)
        try:
            tree = ast.parse(expr, mode="eval")
        except SyntaxError as e:
            raise _ExprError("not a valid expression") from e

        if sum(1 for _ in ast.walk(tree)) > _MAX_NODES:
            raise _ExprError("expression too large")

        return _eval_tree(tree, literals)
    except _ExprError as e:
        raise UserInputError(f"Invalid input: {e} in {s!r}.") from None

