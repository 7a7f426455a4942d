"""
Backward Converter — interchange tree -> native tree

Structural build driven by the reverse Recipe table. Two paths degrade to
kernel text evaluation because the kernel has no structural constructor for
them:
- relational tags: '(lhs)<sym>(rhs)'
- unmapped tags:   'tagname(arg1,arg2,...)'  (+ UnmappedOperatorWarning)

A third, optional text path rebuilds big integers from their decimal form
when the byte transcoder is disabled.
"""

import logging
import warnings
from fractions import Fraction
from typing import Optional

from cas_interchange.conversion.config import ConversionConfig
from cas_interchange.conversion.kernel import Evaluator, Renderer, render_native, require_evaluator
from cas_interchange.core.domain.interchange import (
    FunctionExpr,
    InterchangeExpr,
    NumberExpr,
    SymbolExpr,
)
from cas_interchange.core.domain.native import (
    NativeKind,
    NativeNode,
    make_application_unevaluated,
    make_complex,
    make_double,
    make_fraction,
    make_identifier,
    make_int,
    make_vector,
)
from cas_interchange.core.errors import (
    PrecisionLossRisk,
    UnmappedOperatorWarning,
    UnsupportedVariant,
)
from cas_interchange.core.math.bigint import bigint_node_from_int, fits_native_int
from cas_interchange.core.tables import Recipe, RecipeKind, native_name_for_symbol, recipe_for_tag

logger = logging.getLogger(__name__)


class InterchangeToNative:
    """
    Interchange -> native converter with injected kernel capabilities.

    Holds no per-conversion state; one instance can serve concurrent calls.
    """

    def __init__(
        self,
        evaluate: Optional[Evaluator] = None,
        render: Renderer = render_native,
        config: Optional[ConversionConfig] = None,
    ):
        """
        Args:
            evaluate: kernel string evaluator for the text fallback paths
                (optional; without it those paths raise UnsupportedVariant)
            render: native -> kernel text renderer
            config: conversion settings (default ConversionConfig())
        """
        self.evaluate = evaluate
        self.render = render
        self.config = config or ConversionConfig()

    def convert(self, expr: InterchangeExpr) -> NativeNode:
        """
        Convert an interchange node to an equivalent native node.

        Raises:
            UnsupportedVariant: unknown variant, or a text fallback without evaluator
            PrecisionLossRisk: big integer with neither transcoder nor evaluator
        """
        if isinstance(expr, NumberExpr):
            return self._number(expr)
        if isinstance(expr, SymbolExpr):
            return self._symbol(expr)
        if isinstance(expr, FunctionExpr):
            return self._function(expr)
        raise UnsupportedVariant(type(expr).__name__, "not an interchange node")

    # -------------------------------------------------------------------------
    # Numbers
    # -------------------------------------------------------------------------

    def _number(self, expr: NumberExpr) -> NativeNode:
        value = expr.value
        if isinstance(value, Fraction):
            return make_fraction(self._integer(value.numerator), self._integer(value.denominator))
        if isinstance(value, float):
            return make_double(value)
        return self._integer(value)

    def _integer(self, n: int) -> NativeNode:
        if fits_native_int(n, self.config.native_int_min, self.config.native_int_max):
            return make_int(n)

        if self.config.use_byte_transcoder:
            return bigint_node_from_int(n)

        if self.evaluate is None:
            raise PrecisionLossRisk(
                f"integer with {n.bit_length()} bits exceeds the native range and "
                f"neither the byte transcoder nor a kernel evaluator is available"
            )
        # Decimal text goes through the kernel parser, which keeps every digit
        return self._eval_text(str(n))

    # -------------------------------------------------------------------------
    # Symbols
    # -------------------------------------------------------------------------

    def _symbol(self, expr: SymbolExpr) -> NativeNode:
        # The kernel keeps neither constant as an atomic identifier
        if expr.name == "ExponentialE":
            return make_application_unevaluated("exp", [make_int(1)])
        if expr.name == "ImaginaryUnit":
            return make_complex(make_int(0), make_int(1))
        return make_identifier(native_name_for_symbol(expr.name))

    # -------------------------------------------------------------------------
    # Functions
    # -------------------------------------------------------------------------

    def _function(self, expr: FunctionExpr) -> NativeNode:
        recipe = recipe_for_tag(expr.operator)
        args = expr.arguments

        if recipe is None:
            return self._unmapped(expr)

        if recipe.kind == RecipeKind.STRUCTURAL:
            if not recipe.accepts_arity(len(args)):
                return self._unmapped(expr)
            return self._structural(recipe, args)

        if recipe.kind == RecipeKind.RELATIONAL and recipe.accepts_arity(len(args)):
            return self._relational(recipe.native_name, args)

        return make_application_unevaluated(recipe.native_name, [self.convert(a) for a in args])

    def _structural(self, recipe: Recipe, args: tuple[InterchangeExpr, ...]) -> NativeNode:
        children = [self.convert(a) for a in args]
        if recipe.builds == NativeKind.FRACTION:
            return make_fraction(children[0], children[1])
        if recipe.builds == NativeKind.COMPLEX:
            return make_complex(children[0], children[1])
        if recipe.builds == NativeKind.VECTOR:
            return make_vector(children)
        raise UnsupportedVariant(str(recipe.builds), "no structural builder")

    def _relational(self, symbol: str, args: tuple[InterchangeExpr, ...]) -> NativeNode:
        lhs = self.render(self.convert(args[0]))
        rhs = self.render(self.convert(args[1]))
        return self._eval_text(f"({lhs}){symbol}({rhs})", tag=symbol)

    def _unmapped(self, expr: FunctionExpr) -> NativeNode:
        warnings.warn(
            f"Unsupported interchange operator '{expr.operator}', rebuilding it from text",
            UnmappedOperatorWarning,
            stacklevel=3,
        )
        rendered = ",".join(self.render(self.convert(a)) for a in expr.arguments)
        return self._eval_text(f"{expr.operator.lower()}({rendered})", tag=expr.operator)

    def _eval_text(self, text: str, tag: str = "Number") -> NativeNode:
        evaluate = require_evaluator(self.evaluate, tag, text)
        logger.debug("re-evaluating %r through the kernel", text)
        return evaluate(text)


def to_native(
    expr: InterchangeExpr,
    evaluate: Optional[Evaluator] = None,
    config: Optional[ConversionConfig] = None,
) -> NativeNode:
    """
    Convert an interchange node to a native node.

    Args:
        expr: Interchange tree
        evaluate: kernel string evaluator for the text fallbacks (optional)
        config: conversion settings

    Returns:
        Native tree node
    """
    return InterchangeToNative(evaluate=evaluate, config=config).convert(expr)
