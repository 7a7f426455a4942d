"""
SymPy Adapter — native tree <-> SymPy expression

to_sympy walks the native tree structurally. Products and powers keep their
factored shape (evaluate=False) and preservable functions stay unevaluated,
so sqrt(2) remains sqrt(2) rather than 1.414...; sums, differences and
quotients are left to SymPy arithmetic. A preservable call that is an
operand of arithmetic is wrapped in UnevaluatedExpr so SymPy cannot fold
it. Operators with no structural counterpart are rendered and handed to the
syntax-fallback parser.

from_sympy walks back. SymPy heads without a native counterpart are printed
with sympy.sstr and re-evaluated through the injected kernel evaluator.
"""

import logging
from fractions import Fraction
from types import MappingProxyType
from typing import Callable, Final, Mapping, Optional

import sympy
from sympy.core.function import AppliedUndef

from cas_interchange.conversion.backward import InterchangeToNative
from cas_interchange.conversion.config import ConversionConfig
from cas_interchange.conversion.kernel import Evaluator, require_evaluator
from cas_interchange.core.domain.interchange import NumberExpr
from cas_interchange.core.domain.native import (
    ApplicationNode,
    NativeKind,
    NativeNode,
    make_application_unevaluated,
    make_complex,
    make_identifier,
    make_int,
    make_vector,
)
from cas_interchange.core.domain.rendering import render_native
from cas_interchange.core.errors import UnsupportedVariant
from cas_interchange.core.math.bigint import int_from_bigint_node
from cas_interchange.symbolic.parser import (
    CONSTANTS,
    DEFAULT_PRESERVABLE,
    RELATIONS,
    VarCache,
    parse_symbolic,
    preserved_call,
)

logger = logging.getLogger(__name__)


# =============================================================================
# NAME TABLES
# =============================================================================

# SymPy class name -> native operator name
SYMPY_TO_NATIVE_NAME: Final[Mapping[str, str]] = MappingProxyType({
    "exp": "exp",
    "log": "ln",
    "Abs": "abs",
    "sign": "sign",
    "floor": "floor",
    "ceiling": "ceil",
    "Max": "max",
    "Min": "min",
    "factorial": "factorial",
    "sin": "sin",
    "cos": "cos",
    "tan": "tan",
    "cot": "cot",
    "sec": "sec",
    "csc": "csc",
    "asin": "asin",
    "acos": "acos",
    "atan": "atan",
    "acot": "acot",
    "atan2": "atan2",
    "sinh": "sinh",
    "cosh": "cosh",
    "tanh": "tanh",
    "coth": "coth",
    "asinh": "asinh",
    "acosh": "acosh",
    "atanh": "atanh",
    "re": "re",
    "im": "im",
    "conjugate": "conj",
    "arg": "arg",
    "gcd": "gcd",
    "lcm": "lcm",
    "binomial": "binomial",
    "fibonacci": "fibonacci",
    "gamma": "Gamma",
    "beta": "beta",
    "erf": "erf",
    "erfc": "erfc",
    "zeta": "zeta",
    "digamma": "digamma",
    "Heaviside": "Heaviside",
    "besselj": "BesselJ",
    "bessely": "BesselY",
    "besseli": "BesselI",
    "besselk": "BesselK",
    "airyai": "Ai",
    "airybi": "Bi",
})

# sympy rel_op -> native relational symbol
_RELATIONAL_SYMBOL: Final[Mapping[str, str]] = MappingProxyType({
    "==": "=",
    "!=": "!=",
    "<": "<",
    "<=": "<=",
    ">": ">",
    ">=": ">=",
})

_INFINITY: Final[str] = "inf"

_ARITHMETIC: Final[frozenset[str]] = frozenset({"+", "*", "-", "/", "^"})


# =============================================================================
# NATIVE -> SYMPY
# =============================================================================


def to_sympy(
    node: NativeNode,
    var_cache: Optional[VarCache] = None,
    preservable=DEFAULT_PRESERVABLE,
):
    """
    Convert a native node into a SymPy expression.

    Args:
        node: Native tree node
        var_cache: Name -> Symbol cache shared by the whole walk (created if omitted)
        preservable: Function names kept as unevaluated applications

    Returns:
        SymPy expression, or a list for a Vector node

    Raises:
        UnsupportedVariant: String nodes, non-node input, and Vector operands of arithmetic
        SyntaxFallbackError: if an unmapped operator's text cannot be parsed

    Examples:
        >>> to_sympy(make_application_unevaluated("sqrt", [make_int(2)]))
        sqrt(2)
    """
    if var_cache is None:
        var_cache = {}
    return _NativeToSympy(var_cache, preservable).convert(node)


class _NativeToSympy:
    def __init__(self, var_cache: VarCache, preservable):
        self.var_cache = var_cache
        self.preservable = preservable

    def convert(self, node):
        kind = getattr(node, "kind", None)

        if kind == NativeKind.INT:
            return sympy.Integer(node.value)
        if kind == NativeKind.BIGINT:
            return sympy.Integer(int_from_bigint_node(node))
        if kind == NativeKind.DOUBLE:
            return sympy.Float(node.value)
        if kind == NativeKind.FRACTION:
            numerator = self._operand(node.numerator)
            denominator = self._operand(node.denominator)
            if numerator.is_Integer and denominator.is_Integer:
                return sympy.Rational(numerator, denominator)
            return numerator / denominator
        if kind == NativeKind.COMPLEX:
            return self._operand(node.real) + self._operand(node.imaginary) * sympy.I
        if kind == NativeKind.IDENTIFIER:
            return self._identifier(node.name)
        if kind == NativeKind.VECTOR:
            return [self.convert(e) for e in node.elements]
        if kind == NativeKind.APPLICATION:
            return self._application(node)
        if kind == NativeKind.STRING:
            raise UnsupportedVariant(NativeKind.STRING.value, "strings have no SymPy counterpart")
        raise UnsupportedVariant(type(node).__name__, "not a native node")

    def _operand(self, node):
        """Convert a node that SymPy arithmetic is about to combine."""
        value = self.convert(node)
        if isinstance(value, list):
            raise UnsupportedVariant(NativeKind.VECTOR.value, "a list cannot be an arithmetic operand")
        if node.kind == NativeKind.APPLICATION and node.operator in self.preservable:
            return sympy.UnevaluatedExpr(value)
        return value

    def _identifier(self, name: str):
        if name in CONSTANTS:
            return CONSTANTS[name]
        if name not in self.var_cache:
            self.var_cache[name] = sympy.Symbol(name)
        return self.var_cache[name]

    def _application(self, node: ApplicationNode):
        op = node.operator
        arity = len(node.arguments)

        if op in _ARITHMETIC:
            args = [self._operand(a) for a in node.arguments]
        else:
            args = [self.convert(a) for a in node.arguments]

        if op == "+" and arity >= 1:
            return sympy.Add(*args)
        if op == "*" and arity >= 1:
            return sympy.Mul(*args, evaluate=False)
        if op == "-" and arity == 1:
            return -args[0]
        if op == "-" and arity == 2:
            return args[0] - args[1]
        if op == "/" and arity == 2:
            return args[0] / args[1]
        if op == "^" and arity == 2:
            return sympy.Pow(args[0], args[1], evaluate=False)
        if op in RELATIONS and arity == 2:
            return RELATIONS[op](args[0], args[1], evaluate=False)
        if op in self.preservable:
            return preserved_call(op, args, op)

        text = render_native(node)
        logger.debug("no structural SymPy form for %r, parsing %r", op, text)
        return parse_symbolic(text, self.var_cache, self.preservable)


# =============================================================================
# SYMPY -> NATIVE
# =============================================================================


class SympyToNative:
    """
    SymPy -> native converter.

    Numbers go through the backward converter's number path, so big integers
    and the native integer range follow the same ConversionConfig.
    """

    def __init__(
        self,
        evaluate: Optional[Evaluator] = None,
        config: Optional[ConversionConfig] = None,
        printer: Callable[[sympy.Basic], str] = sympy.sstr,
    ):
        """
        Args:
            evaluate: kernel string evaluator for SymPy heads without a native form
            config: conversion settings (default ConversionConfig())
            printer: SymPy -> kernel text printer for the text fallback
        """
        self.evaluate = evaluate
        self.printer = printer
        self._numbers = InterchangeToNative(evaluate=evaluate, config=config)

    def convert(self, expr) -> NativeNode:
        """
        Convert a SymPy expression (or a list/tuple of them) to a native node.

        Raises:
            UnsupportedVariant: no native form and no kernel evaluator
        """
        if isinstance(expr, (list, tuple)):
            return make_vector([self.convert(e) for e in expr])
        if not isinstance(expr, sympy.Basic):
            expr = sympy.sympify(expr)

        if expr is sympy.pi:
            return make_identifier("pi")
        if expr is sympy.E:
            return make_application_unevaluated("exp", [make_int(1)])
        if expr is sympy.I:
            return make_complex(make_int(0), make_int(1))
        if expr is sympy.oo:
            return make_identifier(_INFINITY)
        if expr is sympy.S.NegativeInfinity:
            return make_application_unevaluated("-", [make_identifier(_INFINITY)])

        if expr.is_Integer:
            return self._numbers.convert(NumberExpr(int(expr)))
        if expr.is_Rational:
            return self._numbers.convert(NumberExpr(Fraction(int(expr.p), int(expr.q))))
        if expr.is_Float:
            return self._numbers.convert(NumberExpr(float(expr)))
        if expr.is_Symbol:
            return make_identifier(expr.name)

        if expr.is_Add:
            return self._apply("+", expr.args)
        if expr.is_Mul:
            return self._apply("*", expr.args)
        if expr.is_Pow:
            return self._apply("^", expr.args)
        if expr.is_Relational and expr.rel_op in _RELATIONAL_SYMBOL:
            return self._apply(_RELATIONAL_SYMBOL[expr.rel_op], expr.args)

        if isinstance(expr, AppliedUndef):
            return self._apply(expr.func.__name__, expr.args)
        if isinstance(expr, sympy.Function):
            name = SYMPY_TO_NATIVE_NAME.get(type(expr).__name__)
            if name is not None:
                return self._apply(name, expr.args)

        return self._eval_text(expr)

    def _apply(self, op: str, args) -> NativeNode:
        return make_application_unevaluated(op, [self.convert(a) for a in args])

    def _eval_text(self, expr) -> NativeNode:
        text = self.printer(expr)
        evaluate = require_evaluator(self.evaluate, type(expr).__name__, text)
        logger.debug("re-evaluating SymPy %s through the kernel as %r", type(expr).__name__, text)
        return evaluate(text)


def from_sympy(
    expr,
    evaluate: Optional[Evaluator] = None,
    config: Optional[ConversionConfig] = None,
) -> NativeNode:
    """
    Convert a SymPy expression to a native node.

    Args:
        expr: SymPy expression, Python number, or list of them
        evaluate: kernel string evaluator for heads without a native form (optional)
        config: conversion settings

    Returns:
        Native tree node
    """
    return SympyToNative(evaluate=evaluate, config=config).convert(expr)
