"""
Expression models.

Native tree (the kernel's tagged variants), interchange tree (MathJSON) and
the kernel-syntax renderer for native nodes.
"""

from cas_interchange.core.domain.interchange import (
    FunctionExpr,
    InterchangeExpr,
    NumberExpr,
    SymbolExpr,
    function,
    function_of,
)
from cas_interchange.core.domain.native import (
    NATIVE_INT_MAX,
    NATIVE_INT_MIN,
    ApplicationNode,
    BigIntNode,
    ComplexNode,
    DoubleNode,
    FractionNode,
    IdentifierNode,
    IntNode,
    NativeKind,
    NativeNode,
    StringNode,
    VectorNode,
    make_application_unevaluated,
    make_bigint_from_bytes,
    make_complex,
    make_double,
    make_fraction,
    make_identifier,
    make_int,
    make_string,
    make_vector,
)
from cas_interchange.core.domain.rendering import render_native

__all__ = [
    # Native tree
    "NATIVE_INT_MIN",
    "NATIVE_INT_MAX",
    "NativeKind",
    "NativeNode",
    "IntNode",
    "DoubleNode",
    "BigIntNode",
    "FractionNode",
    "ComplexNode",
    "IdentifierNode",
    "ApplicationNode",
    "VectorNode",
    "StringNode",
    "make_int",
    "make_double",
    "make_bigint_from_bytes",
    "make_fraction",
    "make_complex",
    "make_identifier",
    "make_vector",
    "make_string",
    "make_application_unevaluated",
    # Interchange tree
    "InterchangeExpr",
    "NumberExpr",
    "SymbolExpr",
    "FunctionExpr",
    "function",
    "function_of",
    # Rendering
    "render_native",
]
