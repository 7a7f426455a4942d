"""
Forward Converter — native tree -> interchange tree

Recursive structural walk. Every NativeKind has exactly one handler in
_HANDLERS; the module refuses to import if one is missing.

Rewrite rules applied to applications before table lookup:
- unary '-'            -> Negate(x)
- '^' with exponent 1/2 -> Sqrt(x)   (the kernel stores sqrt as a power)
"""

from typing import Callable, Final, Mapping

from cas_interchange.core.domain.interchange import (
    FunctionExpr,
    InterchangeExpr,
    NumberExpr,
    SymbolExpr,
    function_of,
    is_one_half,
)
from cas_interchange.core.domain.native import NativeKind, NativeNode
from cas_interchange.core.errors import UnsupportedVariant
from cas_interchange.core.math.bigint import int_from_bigint_node
from cas_interchange.core.tables import fallback_tag, symbol_for_native_name, tag_for_native


def to_interchange(node: NativeNode) -> InterchangeExpr:
    """
    Convert a native node to an equivalent interchange node.

    Args:
        node: Native tree node

    Returns:
        NumberExpr, SymbolExpr or FunctionExpr

    Raises:
        UnsupportedVariant: if the node's tag has no conversion rule
    """
    kind = getattr(node, "kind", None)
    handler = _HANDLERS.get(kind)
    if handler is None:
        raise UnsupportedVariant(type(node).__name__, "not a native tree node")
    return handler(node)


# =============================================================================
# HANDLERS
# =============================================================================


def _int(node) -> InterchangeExpr:
    return NumberExpr(int(node.value))


def _double(node) -> InterchangeExpr:
    return NumberExpr(float(node.value))


def _bigint(node) -> InterchangeExpr:
    # Exact value; never approximated as a float
    return NumberExpr(int_from_bigint_node(node))


def _fraction(node) -> InterchangeExpr:
    return FunctionExpr("Rational", (to_interchange(node.numerator), to_interchange(node.denominator)))


def _complex(node) -> InterchangeExpr:
    return FunctionExpr("Complex", (to_interchange(node.real), to_interchange(node.imaginary)))


def _identifier(node) -> InterchangeExpr:
    return SymbolExpr(symbol_for_native_name(node.name))


def _application(node) -> InterchangeExpr:
    op = node.operator
    args = tuple(to_interchange(a) for a in node.arguments)

    if op == "-" and len(args) == 1:
        return FunctionExpr("Negate", args)

    if op == "^" and len(args) == 2 and is_one_half(args[1]):
        return FunctionExpr("Sqrt", (args[0],))

    tag = tag_for_native(op)
    if tag is None:
        tag = fallback_tag(op)
    return function_of(tag, args)


def _vector(node) -> InterchangeExpr:
    return function_of("List", [to_interchange(e) for e in node.elements])


def _string(node) -> InterchangeExpr:
    raise UnsupportedVariant(NativeKind.STRING.value, "strings have no interchange form")


_HANDLERS: Final[Mapping[NativeKind, Callable[[NativeNode], InterchangeExpr]]] = {
    NativeKind.INT: _int,
    NativeKind.DOUBLE: _double,
    NativeKind.BIGINT: _bigint,
    NativeKind.FRACTION: _fraction,
    NativeKind.COMPLEX: _complex,
    NativeKind.IDENTIFIER: _identifier,
    NativeKind.APPLICATION: _application,
    NativeKind.VECTOR: _vector,
    NativeKind.STRING: _string,
}

_missing = set(NativeKind) - set(_HANDLERS)
if _missing:
    raise RuntimeError(f"forward converter has no handler for {sorted(k.value for k in _missing)}")
