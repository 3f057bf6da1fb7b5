"""Angle formatting and parsing shared by gate names and the text format."""

from __future__ import annotations

import ast
import math
import re

_ALLOWED_CHARS = re.compile(r"^[0-9\.\s\*\-\+/\(\)eEpiPI]+$")
_PI_NAME = "PI_PLACEHOLDER"


def _pi_multiple_candidates(p: int, q: int):
    if q == 1:
        if p == 1:
            yield "pi"
        elif p == -1:
            yield "-pi"
        else:
            yield f"{p}*pi"
        return
    if p == 1:
        yield f"pi/{q}"
    elif p == -1:
        yield f"-pi/{q}"
    else:
        yield f"{p}*pi/{q}"
        yield f"({p}/{q}*pi)"


def float_to_angle_str(angle: float) -> str:
    """
    Format an angle in radians as a compact expression.

    Rational multiples of π with denominator at most 12 are written as
    ``pi/4``, ``-pi``, ``3*pi/4`` and so on, but only when the expression
    evaluates back to exactly ``angle``. Every other value is written as
    ``repr(angle)``, the shortest string that parses back to the same
    float, so :func:`angle_str_to_float` always recovers the input.

    Parameters
    ----------
    angle : float
        Angle in radians.

    Returns
    -------
    str
        Angle expression.
    """
    angle = float(angle)
    if angle == 0.0:
        return "0"
    if not math.isfinite(angle):
        return repr(angle)

    pi_multiple = angle / math.pi
    for q in range(1, 13):
        p = round(pi_multiple * q)
        if p == 0 or math.gcd(abs(p), q) != 1:
            continue
        for expr in _pi_multiple_candidates(p, q):
            if angle_str_to_float(expr) == angle:
                return expr

    return repr(angle)


def angle_str_to_float(s: str) -> float:
    """
    Evaluate an angle expression such as ``"3*pi/4"`` or ``"-0.5"``.

    Only numbers, ``pi`` and the operators ``+ - * /`` with parentheses are
    accepted. The expression is walked as an AST rather than passed to
    ``eval``.

    Parameters
    ----------
    s : str
        Angle expression.

    Returns
    -------
    float
        Angle in radians.

    Raises
    ------
    ValueError
        If the expression is empty, malformed or uses anything else.
    """
    s = s.strip()
    if not s:
        raise ValueError("Empty angle expression.")
    if not _ALLOWED_CHARS.match(s):
        raise ValueError(
            f"Angle expression contains disallowed characters: {s!r}. "
            "Only numbers, 'pi', '+', '-', '*', '/', '(', ')' are allowed."
        )

    normalized = re.sub(r"\bpi\b", _PI_NAME, s, flags=re.IGNORECASE)
    try:
        tree = ast.parse(normalized, mode="eval")
    except SyntaxError as e:
        raise ValueError(f"Invalid angle expression syntax: {s!r}. Error: {e}") from e

    def eval_node(node: ast.AST) -> float:
        if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)):
            return float(node.value)
        if isinstance(node, ast.Name):
            if node.id == _PI_NAME:
                return math.pi
            raise ValueError(
                f"Unknown identifier '{node.id}' in angle expression: {s!r}. "
                "Only 'pi' is supported."
            )
        if isinstance(node, ast.BinOp):
            left = eval_node(node.left)
            right = eval_node(node.right)
            if isinstance(node.op, ast.Mult):
                return left * right
            if isinstance(node.op, ast.Div):
                if right == 0:
                    raise ValueError(f"Division by zero in angle expression: {s!r}")
                return left / right
            if isinstance(node.op, ast.Add):
                return left + right
            if isinstance(node.op, ast.Sub):
                return left - right
        if isinstance(node, ast.UnaryOp):
            if isinstance(node.op, ast.USub):
                return -eval_node(node.operand)
            if isinstance(node.op, ast.UAdd):
                return eval_node(node.operand)
        raise ValueError(f"Unsupported construct in angle expression: {s!r}")

    return float(eval_node(tree.body))


def format_params(params) -> str:
    """Format a parameter tuple as ``a,b,c`` for gate names."""
    return ",".join(float_to_angle_str(p) for p in params)


__all__ = ["float_to_angle_str", "angle_str_to_float", "format_params"]
