"""
Interchange tree (MathJSON shape): canonical external expression nodes.

Three immutable variants:
- NumberExpr: int (64-bit or arbitrary precision), float, or exact Fraction
- SymbolExpr: canonical symbol name ('x', 'Pi', 'ExponentialE', ...)
- FunctionExpr: operator tag + ordered arguments
"""

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Final, Sequence, Union

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1


# =============================================================================
# NODES
# =============================================================================


@dataclass(frozen=True)
class NumberExpr:
    """Numeric literal."""

    value: Union[int, float, Fraction]

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float, Fraction)):
            raise TypeError(f"NumberExpr value must be int, float or Fraction, got {type(self.value).__name__}")

    @property
    def is_integer(self) -> bool:
        return isinstance(self.value, int)

    @property
    def is_machine_integer(self) -> bool:
        """Integer that fits in 64 bits."""
        return self.is_integer and INT64_MIN <= self.value <= INT64_MAX

    @property
    def is_big_integer(self) -> bool:
        """Integer that needs arbitrary precision."""
        return self.is_integer and not self.is_machine_integer

    @property
    def is_float(self) -> bool:
        return isinstance(self.value, float)

    @property
    def is_rational(self) -> bool:
        return isinstance(self.value, Fraction)


@dataclass(frozen=True)
class SymbolExpr:
    """Named symbol or constant."""

    name: str

    def __post_init__(self):
        if not self.name:
            raise ValueError("SymbolExpr name must be non-empty")


@dataclass(frozen=True)
class FunctionExpr:
    """Operator applied to an ordered tuple of arguments."""

    operator: str
    arguments: tuple["InterchangeExpr", ...] = field(default=())

    def __post_init__(self):
        if not self.operator:
            raise ValueError("FunctionExpr operator must be non-empty")
        # Accept any sequence, store a tuple
        object.__setattr__(self, "arguments", tuple(self.arguments))


InterchangeExpr = Union[NumberExpr, SymbolExpr, FunctionExpr]


# =============================================================================
# CONVENIENCE CONSTRUCTORS
# =============================================================================


def function(operator: str, *arguments: InterchangeExpr) -> FunctionExpr:
    """FunctionExpr from positional arguments: function('Add', x, one)."""
    return FunctionExpr(operator, arguments)


def function_of(operator: str, arguments: Sequence[InterchangeExpr]) -> FunctionExpr:
    return FunctionExpr(operator, tuple(arguments))


def is_one_half(expr: InterchangeExpr) -> bool:
    """
    True if expr is exactly the rational one half.

    Accepts both the structural form Rational(1, 2) and a Fraction number.
    """
    if isinstance(expr, NumberExpr):
        return expr.is_rational and expr.value == Fraction(1, 2)

    if isinstance(expr, FunctionExpr) and expr.operator == "Rational" and len(expr.arguments) == 2:
        num, den = expr.arguments
        return (
            isinstance(num, NumberExpr)
            and num.is_integer
            and num.value == 1
            and isinstance(den, NumberExpr)
            and den.is_integer
            and den.value == 2
        )

    return False
