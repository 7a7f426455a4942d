"""
Big-Integer Transcoder — sign/magnitude byte transfer

Converts host integers (unbounded ``int``) to the kernel's arbitrary-precision
representation (big-endian magnitude bytes + separate sign) and back.

INVARIANTS:
1. Only byte-level operations; nothing passes through a fixed-width integer
2. Zero <=> (b"", 0) in both directions
3. Magnitude is minimal (no leading zero bytes) on the way out
4. Sign is applied as a separate negation step after magnitude reconstruction
"""

from typing import Final

from cas_interchange.core.domain.native import (
    NATIVE_INT_MAX,
    NATIVE_INT_MIN,
    BigIntNode,
    make_bigint_from_bytes,
)

BYTE_ORDER: Final[str] = "big"


# =============================================================================
# BYTES <-> INT
# =============================================================================


def int_to_sign_magnitude(n: int) -> tuple[bytes, int]:
    """
    Split an integer into (magnitude bytes, sign).

    Args:
        n: Any Python integer

    Returns:
        (magnitude, sign) with magnitude big-endian and minimal,
        sign in {-1, 0, 1}

    Examples:
        >>> int_to_sign_magnitude(0)
        (b'', 0)
        >>> int_to_sign_magnitude(-258)
        (b'\\x01\\x02', -1)
    """
    if n == 0:
        return (b"", 0)

    sign = -1 if n < 0 else 1
    magnitude = -n if n < 0 else n
    byte_count = (magnitude.bit_length() + 7) // 8
    return (magnitude.to_bytes(byte_count, BYTE_ORDER), sign)


def sign_magnitude_to_int(magnitude: bytes, sign: int) -> int:
    """
    Rebuild an integer from magnitude bytes and sign.

    Args:
        magnitude: Big-endian magnitude (leading zero bytes tolerated)
        sign: -1, 0 or 1

    Returns:
        The exact integer value

    Raises:
        ValueError: if sign is out of range, or a non-zero sign comes with an
            empty magnitude
    """
    if sign not in (-1, 0, 1):
        raise ValueError(f"sign must be -1, 0 or 1, got {sign}")

    if sign == 0:
        return 0

    if not magnitude:
        raise ValueError(f"sign {sign} requires a non-empty magnitude")

    value = int.from_bytes(magnitude, BYTE_ORDER, signed=False)
    if sign < 0:
        value = -value
    return value


# =============================================================================
# NODE HELPERS
# =============================================================================


def bigint_node_from_int(n: int) -> BigIntNode:
    """Wrap an integer of any size as a native BigInt node."""
    magnitude, sign = int_to_sign_magnitude(n)
    return make_bigint_from_bytes(magnitude, sign)


def int_from_bigint_node(node: BigIntNode) -> int:
    """Exact value of a native BigInt node."""
    return sign_magnitude_to_int(node.magnitude, node.sign)


def fits_native_int(
    n: int,
    lower: int = NATIVE_INT_MIN,
    upper: int = NATIVE_INT_MAX,
) -> bool:
    """True if n can be stored as a kernel immediate integer."""
    return lower <= n <= upper
