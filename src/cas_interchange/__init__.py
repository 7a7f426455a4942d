"""
cas-interchange: conversion between a CAS kernel's native expression tree,
the MathJSON interchange format, and SymPy.

Entry points:
- to_interchange / to_native   : native <-> interchange tree
- dumps / loads                : interchange tree <-> MathJSON text
- to_sympy / from_sympy        : native <-> SymPy
- parse_symbolic               : kernel text -> SymPy (syntax fallback)
"""

from cas_interchange.conversion import (
    ConversionConfig,
    InterchangeToNative,
    to_interchange,
    to_native,
)
from cas_interchange.core.contracts import dumps, loads
from cas_interchange.core.errors import (
    ConversionError,
    PrecisionLossRisk,
    SyntaxFallbackError,
    UnmappedOperatorWarning,
    UnsupportedVariant,
)
from cas_interchange.symbolic import from_sympy, parse_symbolic, to_sympy

__version__ = "0.1.0"

__all__ = [
    # Conversion
    "ConversionConfig",
    "InterchangeToNative",
    "to_interchange",
    "to_native",
    # Wire format
    "dumps",
    "loads",
    # SymPy
    "to_sympy",
    "from_sympy",
    "parse_symbolic",
    # Errors
    "ConversionError",
    "UnsupportedVariant",
    "PrecisionLossRisk",
    "SyntaxFallbackError",
    "UnmappedOperatorWarning",
]
