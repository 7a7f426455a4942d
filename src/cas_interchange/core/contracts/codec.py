"""
MathJSON wire codec for interchange trees.

Encoding rules:
- integers within the JSON safe range -> JSON numbers
- larger integers -> {"num": "<decimal digits>"} (exact, never a float)
- finite floats -> JSON numbers; NaN/Infinity -> {"num": "NaN" | "+Infinity" | "-Infinity"}
- rationals -> ["Rational", numerator, denominator]
- symbols -> strings, functions -> [operator, ...arguments]

Decoding validates against the MathJSON contract first.
"""

import json
import math
import re
from fractions import Fraction
from typing import Any, Final

from cas_interchange.core.contracts.validators import MathJSONValidator
from cas_interchange.core.domain.interchange import (
    FunctionExpr,
    InterchangeExpr,
    NumberExpr,
    SymbolExpr,
)
from cas_interchange.core.errors import UnsupportedVariant

# Largest integer a JSON reader can hold in a double without rounding
MAX_SAFE_INTEGER: Final[int] = 2**53 - 1

_INTEGER_TEXT = re.compile(r"^[+-]?[0-9]+$")


# =============================================================================
# ENCODE
# =============================================================================


def dump_expr(expr: InterchangeExpr) -> Any:
    """
    Encode an interchange tree as MathJSON data (lists, dicts, str, numbers).

    Raises:
        UnsupportedVariant: if expr is not an interchange node
    """
    if isinstance(expr, NumberExpr):
        return _dump_number(expr.value)
    if isinstance(expr, SymbolExpr):
        return expr.name
    if isinstance(expr, FunctionExpr):
        return [expr.operator, *(dump_expr(a) for a in expr.arguments)]
    raise UnsupportedVariant(type(expr).__name__, "not an interchange node")


def _dump_number(value) -> Any:
    if isinstance(value, Fraction):
        return ["Rational", _dump_number(value.numerator), _dump_number(value.denominator)]
    if isinstance(value, float):
        if math.isnan(value):
            return {"num": "NaN"}
        if math.isinf(value):
            return {"num": "+Infinity" if value > 0 else "-Infinity"}
        return value
    if abs(value) <= MAX_SAFE_INTEGER:
        return value
    return {"num": str(value)}


def dumps(expr: InterchangeExpr) -> str:
    """Encode an interchange tree as MathJSON text."""
    return json.dumps(dump_expr(expr), ensure_ascii=False)


# =============================================================================
# DECODE
# =============================================================================


def load_expr(data: Any, validate: bool = True) -> InterchangeExpr:
    """
    Decode MathJSON data into an interchange tree.

    Args:
        data: Parsed JSON value
        validate: Check the MathJSON contract first (default True)

    Returns:
        Interchange tree

    Raises:
        jsonschema.ValidationError: if validate is set and data breaks the contract
    """
    if validate:
        MathJSONValidator().validate(data)
    return _decode(data)


def loads(text: str, validate: bool = True) -> InterchangeExpr:
    """Decode MathJSON text into an interchange tree."""
    return load_expr(json.loads(text), validate=validate)


def _decode(data: Any) -> InterchangeExpr:
    if isinstance(data, bool):
        raise UnsupportedVariant("bool", "booleans are not MathJSON numbers")
    if isinstance(data, (int, float)):
        return NumberExpr(data)
    if isinstance(data, str):
        return SymbolExpr(data)
    if isinstance(data, list):
        return FunctionExpr(data[0], tuple(_decode(a) for a in data[1:]))
    if isinstance(data, dict):
        if "num" in data:
            return NumberExpr(_parse_num(data["num"]))
        if "sym" in data:
            return SymbolExpr(data["sym"])
        if "fn" in data:
            return _decode(data["fn"])
    raise UnsupportedVariant(type(data).__name__, "not a MathJSON expression")


def _parse_num(text: str):
    if text == "NaN":
        return math.nan
    if text.endswith("Infinity"):
        return -math.inf if text.startswith("-") else math.inf
    if _INTEGER_TEXT.match(text):
        return int(text)
    return float(text)
