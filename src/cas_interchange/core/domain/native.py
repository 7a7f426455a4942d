"""
Native tree: the kernel's tagged-variant expression nodes.

Immutable Pydantic models, one per kernel tag, discriminated on ``kind``.
The converters only read and construct these nodes; nothing is mutated in place.

INVARIANTS:
1. Every node belongs to exactly one NativeKind
2. BigInt: sign == 0 <=> empty magnitude (big-endian bytes, sign kept apart)
3. Application arity is derived from the payload shape:
   Vector payload -> its elements are the arguments, otherwise one argument
"""

from enum import Enum
from typing import Annotated, Final, Literal, Sequence, Union

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# CONSTANTS
# =============================================================================

# Kernel immediate integers are 32-bit
NATIVE_INT_MIN: Final[int] = -(2**31)
NATIVE_INT_MAX: Final[int] = 2**31 - 1


# =============================================================================
# ENUMS
# =============================================================================


class NativeKind(str, Enum):
    """Tag of a native node"""

    INT = "INT"
    DOUBLE = "DOUBLE"
    BIGINT = "BIGINT"
    FRACTION = "FRACTION"
    COMPLEX = "COMPLEX"
    IDENTIFIER = "IDENTIFIER"
    APPLICATION = "APPLICATION"
    VECTOR = "VECTOR"
    STRING = "STRING"


# =============================================================================
# NODE MODELS
# =============================================================================


class IntNode(BaseModel):
    """Machine-width signed integer."""

    kind: Literal[NativeKind.INT] = NativeKind.INT
    value: int = Field(..., ge=NATIVE_INT_MIN, le=NATIVE_INT_MAX, description="Immediate value")

    model_config = {"frozen": True}


class DoubleNode(BaseModel):
    """IEEE-754 double."""

    kind: Literal[NativeKind.DOUBLE] = NativeKind.DOUBLE
    value: float

    model_config = {"frozen": True}


class BigIntNode(BaseModel):
    """
    Arbitrary-precision integer as sign + big-endian magnitude bytes.

    Zero is the pair (b"", 0).
    """

    kind: Literal[NativeKind.BIGINT] = NativeKind.BIGINT
    sign: int = Field(..., ge=-1, le=1, description="-1, 0 or +1")
    magnitude: bytes = Field(default=b"", validate_default=True, description="Big-endian magnitude")

    model_config = {"frozen": True}

    @field_validator("magnitude")
    @classmethod
    def validate_magnitude_matches_sign(cls, v: bytes, info) -> bytes:
        """Magnitude must be empty exactly when the sign is zero"""
        if "sign" in info.data:
            sign = info.data["sign"]
            if sign == 0 and v:
                raise ValueError("sign 0 requires an empty magnitude")
            if sign != 0 and not any(v):
                raise ValueError(f"sign {sign} requires a non-zero magnitude")
        return v


class FractionNode(BaseModel):
    """Exact quotient; both parts are arbitrary native nodes."""

    kind: Literal[NativeKind.FRACTION] = NativeKind.FRACTION
    numerator: "NativeNode"
    denominator: "NativeNode"

    model_config = {"frozen": True}


class ComplexNode(BaseModel):
    """Complex number with native real and imaginary parts."""

    kind: Literal[NativeKind.COMPLEX] = NativeKind.COMPLEX
    real: "NativeNode"
    imaginary: "NativeNode"

    model_config = {"frozen": True}


class IdentifierNode(BaseModel):
    """Variable or named constant; the two are told apart only by name."""

    kind: Literal[NativeKind.IDENTIFIER] = NativeKind.IDENTIFIER
    name: str = Field(..., min_length=1)

    model_config = {"frozen": True}


class ApplicationNode(BaseModel):
    """
    Operator applied to a payload (the kernel's "feuille").

    The payload is a VectorNode for multi-argument calls and a bare node for
    unary ones.
    """

    kind: Literal[NativeKind.APPLICATION] = NativeKind.APPLICATION
    operator: str = Field(..., min_length=1, description="Native operator spelling")
    payload: "NativeNode"

    model_config = {"frozen": True}

    @property
    def arguments(self) -> tuple["NativeNode", ...]:
        """Arguments in order, derived from the payload shape."""
        if self.payload.kind == NativeKind.VECTOR:
            return self.payload.elements
        return (self.payload,)


class VectorNode(BaseModel):
    """Ordered sequence: list literal or argument list, depending on context."""

    kind: Literal[NativeKind.VECTOR] = NativeKind.VECTOR
    elements: tuple["NativeNode", ...] = ()

    model_config = {"frozen": True}


class StringNode(BaseModel):
    """Kernel string literal. No interchange counterpart."""

    kind: Literal[NativeKind.STRING] = NativeKind.STRING
    value: str

    model_config = {"frozen": True}


NativeNode = Annotated[
    Union[
        IntNode,
        DoubleNode,
        BigIntNode,
        FractionNode,
        ComplexNode,
        IdentifierNode,
        ApplicationNode,
        VectorNode,
        StringNode,
    ],
    Field(discriminator="kind"),
]

NATIVE_NODE_TYPES: Final[tuple[type[BaseModel], ...]] = (
    IntNode,
    DoubleNode,
    BigIntNode,
    FractionNode,
    ComplexNode,
    IdentifierNode,
    ApplicationNode,
    VectorNode,
    StringNode,
)

for _model in NATIVE_NODE_TYPES:
    _model.model_rebuild()


# =============================================================================
# CONSTRUCTION PRIMITIVES
# =============================================================================


def make_int(value: int) -> IntNode:
    return IntNode(value=value)


def make_double(value: float) -> DoubleNode:
    return DoubleNode(value=value)


def make_bigint_from_bytes(magnitude: bytes, sign: int) -> BigIntNode:
    """
    Build a BigInt node from big-endian magnitude bytes and a separate sign.

    Raises:
        pydantic.ValidationError: if sign and magnitude disagree
    """
    return BigIntNode(sign=sign, magnitude=bytes(magnitude))


def make_fraction(numerator: NativeNode, denominator: NativeNode) -> FractionNode:
    return FractionNode(numerator=numerator, denominator=denominator)


def make_complex(real: NativeNode, imaginary: NativeNode) -> ComplexNode:
    return ComplexNode(real=real, imaginary=imaginary)


def make_identifier(name: str) -> IdentifierNode:
    return IdentifierNode(name=name)


def make_vector(elements: Sequence[NativeNode]) -> VectorNode:
    return VectorNode(elements=tuple(elements))


def make_string(value: str) -> StringNode:
    return StringNode(value=value)


def make_application_unevaluated(operator: str, args: Sequence[NativeNode]) -> ApplicationNode:
    """
    Build an application without asking the kernel to evaluate it.

    A single non-vector argument becomes a bare payload; anything else
    (zero arguments, several arguments, or one vector argument) is wrapped
    in a VectorNode so that ``arguments`` gives back exactly ``args``.

    Args:
        operator: Native operator name (e.g. '+', 'sin')
        args: Arguments in order

    Returns:
        ApplicationNode
    """
    args = tuple(args)
    if len(args) == 1 and args[0].kind != NativeKind.VECTOR:
        payload = args[0]
    else:
        payload = VectorNode(elements=args)
    return ApplicationNode(operator=operator, payload=payload)
