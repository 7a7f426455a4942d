"""
SymPy bridge: syntax-fallback parser and structural adapter.
"""

from cas_interchange.symbolic.adapter import SympyToNative, from_sympy, to_sympy
from cas_interchange.symbolic.parser import (
    PRESERVABLE_FUNCTIONS,
    extract_function_parts,
    is_function_call,
    parse_symbolic,
    split_args,
)

__all__ = [
    "PRESERVABLE_FUNCTIONS",
    "parse_symbolic",
    "is_function_call",
    "extract_function_parts",
    "split_args",
    "to_sympy",
    "from_sympy",
    "SympyToNative",
]
