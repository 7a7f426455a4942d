"""
Operator Mapping Tables — native spellings <-> interchange tags

The two directions are separate tables and are NOT inverses of each other:
- several native spellings collapse onto one tag ('log' and 'ln' -> 'Ln')
- several tags rebuild to the same native name ('Ln', 'Log' -> 'ln')
- some tags rebuild a structural node instead of an application
  ('Rational', 'Complex', 'List'), and relational tags are rebuilt through
  the kernel's text evaluator

Reverse values are therefore Recipes, not bare strings.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping, Optional

from cas_interchange.core.domain.native import NativeKind


# =============================================================================
# RECIPES
# =============================================================================


class RecipeKind(str, Enum):
    """How a tag is rebuilt on the native side"""

    OPERATOR = "OPERATOR"
    STRUCTURAL = "STRUCTURAL"
    RELATIONAL = "RELATIONAL"


@dataclass(frozen=True)
class Recipe:
    """
    Reverse-table entry.

    OPERATOR: build an Application named native_name.
    STRUCTURAL: build a `builds` node; arity None means any number of children.
    RELATIONAL: native_name is the relational symbol, rebuilt through text.
    """

    kind: RecipeKind
    native_name: Optional[str] = None
    builds: Optional[NativeKind] = None
    arity: Optional[int] = None

    def accepts_arity(self, n: int) -> bool:
        return self.arity is None or self.arity == n


def _op(name: str) -> Recipe:
    return Recipe(RecipeKind.OPERATOR, native_name=name)


def _rel(symbol: str) -> Recipe:
    return Recipe(RecipeKind.RELATIONAL, native_name=symbol, arity=2)


def _struct(builds: NativeKind, arity: Optional[int]) -> Recipe:
    return Recipe(RecipeKind.STRUCTURAL, builds=builds, arity=arity)


# =============================================================================
# NATIVE -> TAG
# =============================================================================

NATIVE_TO_TAG: Final[Mapping[str, str]] = MappingProxyType({
    # Arithmetic operators
    "+": "Add",
    "*": "Multiply",
    "-": "Subtract",
    "/": "Divide",
    "^": "Power",
    "mod": "Mod",
    # Arithmetic functions
    "abs": "Abs",
    "sign": "Sign",
    "floor": "Floor",
    "ceil": "Ceil",
    "round": "Round",
    "trunc": "Truncate",
    "max": "Max",
    "min": "Min",
    "sqrt": "Sqrt",
    "exp": "Exp",
    "factorial": "Factorial",
    "hypot": "Hypot",
    # Logarithms
    "ln": "Ln",
    "log": "Ln",
    "log10": "Log10",
    # Trigonometric
    "sin": "Sin",
    "cos": "Cos",
    "tan": "Tan",
    "cot": "Cot",
    "sec": "Sec",
    "csc": "Csc",
    "asin": "Arcsin",
    "acos": "Arccos",
    "atan": "Arctan",
    "acot": "Arccot",
    # Hyperbolic
    "sinh": "Sinh",
    "cosh": "Cosh",
    "tanh": "Tanh",
    "coth": "Coth",
    "asinh": "Arsinh",
    "acosh": "Arcosh",
    "atanh": "Artanh",
    # Complex numbers
    "re": "Real",
    "im": "Imaginary",
    "conj": "Conjugate",
    "arg": "Argument",
    # Number theory
    "gcd": "GCD",
    "lcm": "LCM",
    "isprime": "IsPrime",
    "binomial": "Binomial",
    "fibonacci": "Fibonacci",
    # Special functions
    "Gamma": "Gamma",
    "beta": "Beta",
    "erf": "Erf",
    "erfc": "Erfc",
    "zeta": "Zeta",
    "Ai": "AiryAi",
    "Bi": "AiryBi",
    "BesselJ": "BesselJ",
    "BesselY": "BesselY",
    "BesselI": "BesselI",
    "BesselK": "BesselK",
    "digamma": "Digamma",
    "Heaviside": "Heaviside",
    # Linear algebra
    "det": "Determinant",
    "inv": "Inverse",
    "trace": "Trace",
    "transpose": "Transpose",
    "tran": "Transpose",
    "rank": "Rank",
    "diag": "Diagonal",
    "eigenvalues": "Eigenvalues",
    "eigenvectors": "Eigenvectors",
    "norm": "Norm",
    "kernel": "Kernel",
    # Algebra
    "factor": "Factor",
    "expand": "Expand",
    "simplify": "Simplify",
    "normal": "Together",
    # Calculus
    "diff": "D",
    "integrate": "Integrate",
    "limit": "Limit",
    "sum": "Sum",
    "product": "Product",
    # Relational
    "==": "Equal",
    "=": "Equal",
    "!=": "NotEqual",
    "<": "Less",
    "<=": "LessEqual",
    ">": "Greater",
    ">=": "GreaterEqual",
    # Logic
    "and": "And",
    "or": "Or",
    "not": "Not",
    # Statistics
    "mean": "Mean",
    "median": "Median",
    "variance": "Variance",
    "stddev": "StandardDeviation",
    "quartiles": "Quartiles",
    # Collections
    "sort": "Sort",
    "reverse": "Reverse",
})


# =============================================================================
# TAG -> RECIPE
# =============================================================================

TAG_TO_NATIVE: Final[Mapping[str, Recipe]] = MappingProxyType({
    # Structural nodes
    "Rational": _struct(NativeKind.FRACTION, 2),
    "Complex": _struct(NativeKind.COMPLEX, 2),
    "List": _struct(NativeKind.VECTOR, None),
    # Arithmetic operators
    "Add": _op("+"),
    "Multiply": _op("*"),
    "Subtract": _op("-"),
    "Negate": _op("-"),
    "Divide": _op("/"),
    "Power": _op("^"),
    "Mod": _op("mod"),
    # Arithmetic functions
    "Abs": _op("abs"),
    "Sign": _op("sign"),
    "Floor": _op("floor"),
    "Ceil": _op("ceil"),
    "Round": _op("round"),
    "Truncate": _op("trunc"),
    "Max": _op("max"),
    "Min": _op("min"),
    "Sqrt": _op("sqrt"),
    "Exp": _op("exp"),
    "Factorial": _op("factorial"),
    "Hypot": _op("hypot"),
    # Logarithms
    "Ln": _op("ln"),
    "Log": _op("ln"),
    "Log10": _op("log10"),
    # Trigonometric
    "Sin": _op("sin"),
    "Cos": _op("cos"),
    "Tan": _op("tan"),
    "Cot": _op("cot"),
    "Sec": _op("sec"),
    "Csc": _op("csc"),
    "Arcsin": _op("asin"),
    "Arccos": _op("acos"),
    "Arctan": _op("atan"),
    "Arctan2": _op("atan2"),
    "Arccot": _op("acot"),
    # Hyperbolic
    "Sinh": _op("sinh"),
    "Cosh": _op("cosh"),
    "Tanh": _op("tanh"),
    "Coth": _op("coth"),
    "Arsinh": _op("asinh"),
    "Arcosh": _op("acosh"),
    "Artanh": _op("atanh"),
    # Complex numbers
    "Real": _op("re"),
    "Imaginary": _op("im"),
    "Conjugate": _op("conj"),
    "Argument": _op("arg"),
    # Number theory
    "GCD": _op("gcd"),
    "LCM": _op("lcm"),
    "IsPrime": _op("isprime"),
    "Binomial": _op("binomial"),
    "Choose": _op("binomial"),
    "Fibonacci": _op("fibonacci"),
    "Numerator": _op("numerator"),
    "Denominator": _op("denominator"),
    # Special functions
    "Gamma": _op("Gamma"),
    "Beta": _op("beta"),
    "Erf": _op("erf"),
    "Erfc": _op("erfc"),
    "Zeta": _op("zeta"),
    "AiryAi": _op("Ai"),
    "AiryBi": _op("Bi"),
    "BesselJ": _op("BesselJ"),
    "BesselY": _op("BesselY"),
    "BesselI": _op("BesselI"),
    "BesselK": _op("BesselK"),
    "Digamma": _op("digamma"),
    "Heaviside": _op("Heaviside"),
    # Linear algebra
    "Determinant": _op("det"),
    "Inverse": _op("inv"),
    "Trace": _op("trace"),
    "Transpose": _op("transpose"),
    "Rank": _op("rank"),
    "Diagonal": _op("diag"),
    "Eigenvalues": _op("eigenvalues"),
    "Eigenvectors": _op("eigenvectors"),
    "Norm": _op("norm"),
    "Kernel": _op("kernel"),
    # Algebra
    "Factor": _op("factor"),
    "Expand": _op("expand"),
    "ExpandAll": _op("expand"),
    "Simplify": _op("simplify"),
    "Together": _op("normal"),
    "Cancel": _op("normal"),
    # Calculus
    "D": _op("diff"),
    "Derivative": _op("diff"),
    "Integrate": _op("integrate"),
    "Limit": _op("limit"),
    "Sum": _op("sum"),
    "Product": _op("product"),
    # Relational
    "Equal": _rel("="),
    "NotEqual": _rel("!="),
    "Less": _rel("<"),
    "LessEqual": _rel("<="),
    "Greater": _rel(">"),
    "GreaterEqual": _rel(">="),
    # Logic
    "And": _op("and"),
    "Or": _op("or"),
    "Not": _op("not"),
    # Statistics
    "Mean": _op("mean"),
    "Median": _op("median"),
    "Variance": _op("variance"),
    "StandardDeviation": _op("stddev"),
    "Quartiles": _op("quartiles"),
    # Collections
    "Sort": _op("sort"),
    "Reverse": _op("reverse"),
    # Evaluation
    "N": _op("evalf"),
})


# =============================================================================
# CONSTANTS
# =============================================================================

NATIVE_CONST_TO_SYMBOL: Final[Mapping[str, str]] = MappingProxyType({
    "pi": "Pi",
    "π": "Pi",
    "e": "ExponentialE",
    "i": "ImaginaryUnit",
})

SYMBOL_TO_NATIVE_CONST: Final[Mapping[str, str]] = MappingProxyType({
    "Pi": "pi",
    "ExponentialE": "e",
    "ImaginaryUnit": "i",
    "True": "true",
    "False": "false",
})


# =============================================================================
# LOOKUPS
# =============================================================================


def tag_for_native(op_name: str) -> Optional[str]:
    """Interchange tag for a native operator name, or None if unmapped."""
    return NATIVE_TO_TAG.get(op_name)


def fallback_tag(op_name: str) -> str:
    """
    Best-effort tag for an unmapped native operator: first character upper-cased.

    Unlike str.capitalize the remaining characters are kept as-is
    ('besselJ' -> 'BesselJ').
    """
    return op_name[:1].upper() + op_name[1:]


def recipe_for_tag(tag: str) -> Optional[Recipe]:
    """Native construction recipe for an interchange tag, or None if unmapped."""
    return TAG_TO_NATIVE.get(tag)


def symbol_for_native_name(name: str) -> str:
    """Canonical symbol for a native identifier (pass-through for variables)."""
    return NATIVE_CONST_TO_SYMBOL.get(name, name)


def native_name_for_symbol(name: str) -> str:
    """Native identifier for a canonical symbol (pass-through for variables)."""
    return SYMBOL_TO_NATIVE_CONST.get(name, name)
