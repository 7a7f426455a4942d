"""
Contract Validation Module

MathJSON wire contract (JSON Schema) and the codec between MathJSON data and
interchange trees.
"""

from .codec import MAX_SAFE_INTEGER, dump_expr, dumps, load_expr, loads
from .validators import (
    MathJSONValidator,
    SchemaLoader,
    validate_mathjson,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "MathJSONValidator",
    # Functions
    "validate_mathjson",
    "dump_expr",
    "dumps",
    "load_expr",
    "loads",
    # Constants
    "MAX_SAFE_INTEGER",
]
