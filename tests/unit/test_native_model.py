"""
Tests for the native tree models.

Checks:
1. Construction primitives and field constraints
2. BigInt sign/magnitude consistency
3. Application arity derived from the payload shape
4. Immutability (frozen=True)
5. Discriminated-union validation on ``kind``
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from cas_interchange.core.domain import (
    NATIVE_INT_MAX,
    NATIVE_INT_MIN,
    ApplicationNode,
    FractionNode,
    IntNode,
    NativeKind,
    NativeNode,
    VectorNode,
    make_application_unevaluated,
    make_bigint_from_bytes,
    make_double,
    make_fraction,
    make_identifier,
    make_int,
    make_string,
    make_vector,
)


# =============================================================================
# PRIMITIVES
# =============================================================================


class TestPrimitives:
    """Construction primitives"""

    def test_int_range_bounds_accepted(self):
        assert make_int(NATIVE_INT_MAX).value == NATIVE_INT_MAX
        assert make_int(NATIVE_INT_MIN).value == NATIVE_INT_MIN

    def test_int_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            make_int(NATIVE_INT_MAX + 1)
        with pytest.raises(ValidationError):
            make_int(NATIVE_INT_MIN - 1)

    def test_identifier_must_be_non_empty(self):
        with pytest.raises(ValidationError):
            make_identifier("")

    def test_kind_tags(self):
        assert make_int(1).kind == NativeKind.INT
        assert make_double(1.5).kind == NativeKind.DOUBLE
        assert make_string("s").kind == NativeKind.STRING
        assert make_vector([]).kind == NativeKind.VECTOR

    def test_nodes_are_frozen(self):
        node = make_int(3)
        with pytest.raises(ValidationError):
            node.value = 4

    def test_structural_equality(self):
        assert make_fraction(make_int(3), make_int(4)) == make_fraction(make_int(3), make_int(4))
        assert make_fraction(make_int(3), make_int(4)) != make_fraction(make_int(4), make_int(3))


# =============================================================================
# BIGINT
# =============================================================================


class TestBigIntNode:
    """Sign and magnitude must agree"""

    def test_zero_is_empty_magnitude(self):
        node = make_bigint_from_bytes(b"", 0)
        assert node.sign == 0
        assert node.magnitude == b""

    def test_zero_sign_with_bytes_rejected(self):
        with pytest.raises(ValidationError):
            make_bigint_from_bytes(b"\x01", 0)

    def test_nonzero_sign_with_empty_magnitude_rejected(self):
        with pytest.raises(ValidationError):
            make_bigint_from_bytes(b"", 1)

    def test_nonzero_sign_with_zero_bytes_rejected(self):
        with pytest.raises(ValidationError):
            make_bigint_from_bytes(b"\x00\x00", -1)

    def test_sign_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            make_bigint_from_bytes(b"\x01", 2)

    def test_accepts_bytearray(self):
        node = make_bigint_from_bytes(bytearray(b"\x01\x00"), -1)
        assert node.magnitude == b"\x01\x00"


# =============================================================================
# APPLICATION
# =============================================================================


class TestApplicationNode:
    """Arity is derived from the payload"""

    def test_single_argument_is_bare_payload(self):
        x = make_identifier("x")
        node = make_application_unevaluated("sin", [x])

        assert node.payload == x
        assert node.arguments == (x,)

    def test_several_arguments_wrapped_in_vector(self):
        x, one = make_identifier("x"), make_int(1)
        node = make_application_unevaluated("+", [x, one])

        assert node.payload.kind == NativeKind.VECTOR
        assert node.arguments == (x, one)

    def test_single_vector_argument_stays_one_argument(self):
        vec = make_vector([make_int(1), make_int(2)])
        node = make_application_unevaluated("sum", [vec])

        assert node.arguments == (vec,)

    def test_zero_arguments(self):
        node = make_application_unevaluated("rand", [])
        assert node.arguments == ()

    def test_operator_must_be_non_empty(self):
        with pytest.raises(ValidationError):
            make_application_unevaluated("", [make_int(1)])


# =============================================================================
# DISCRIMINATED UNION
# =============================================================================


class TestNativeNodeUnion:
    """Validation through the ``kind`` discriminator"""

    @pytest.fixture
    def adapter(self) -> TypeAdapter:
        return TypeAdapter(NativeNode)

    def test_validates_by_kind(self, adapter):
        node = adapter.validate_python({"kind": "INT", "value": 7})
        assert isinstance(node, IntNode)
        assert node.value == 7

    def test_nested_nodes(self, adapter):
        node = adapter.validate_python(
            {
                "kind": "FRACTION",
                "numerator": {"kind": "INT", "value": 3},
                "denominator": {"kind": "INT", "value": 4},
            }
        )
        assert isinstance(node, FractionNode)
        assert node == make_fraction(make_int(3), make_int(4))

    def test_dump_and_validate_application(self, adapter):
        node = make_application_unevaluated("+", [make_identifier("x"), make_int(1)])
        restored = adapter.validate_python(node.model_dump())

        assert isinstance(restored, ApplicationNode)
        assert isinstance(restored.payload, VectorNode)
        assert restored == node

    def test_unknown_kind_rejected(self, adapter):
        with pytest.raises(ValidationError):
            adapter.validate_python({"kind": "MATRIX", "rows": []})
