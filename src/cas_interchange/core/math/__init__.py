"""
Numeric primitives for the kernel boundary.
"""

from cas_interchange.core.math.bigint import (
    bigint_node_from_int,
    fits_native_int,
    int_from_bigint_node,
    int_to_sign_magnitude,
    sign_magnitude_to_int,
)

__all__ = [
    "int_to_sign_magnitude",
    "sign_magnitude_to_int",
    "bigint_node_from_int",
    "int_from_bigint_node",
    "fits_native_int",
]
