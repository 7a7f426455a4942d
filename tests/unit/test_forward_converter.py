"""
Tests for the forward converter (native tree -> interchange tree).

Checks:
1. Every native kind has a rule (or fails explicitly)
2. Numbers keep exactness, including integers beyond 64 bits
3. Negate and Sqrt rewrites
4. Table lookup and capitalized fallback for unknown operators
"""

from fractions import Fraction

import pytest

from cas_interchange.conversion import to_interchange
from cas_interchange.conversion.forward import _HANDLERS
from cas_interchange.core.domain import (
    FunctionExpr,
    NativeKind,
    NumberExpr,
    SymbolExpr,
    function,
    make_application_unevaluated,
    make_complex,
    make_double,
    make_fraction,
    make_identifier,
    make_int,
    make_string,
    make_vector,
)
from cas_interchange.core.errors import UnsupportedVariant
from cas_interchange.core.math import bigint_node_from_int


def app(op, *args):
    return make_application_unevaluated(op, list(args))


X = SymbolExpr("x")


# =============================================================================
# COVERAGE
# =============================================================================


class TestHandlerCoverage:
    def test_every_kind_has_a_handler(self):
        assert set(_HANDLERS) == set(NativeKind)

    def test_string_is_fatal(self):
        with pytest.raises(UnsupportedVariant) as exc_info:
            to_interchange(make_string("hello"))
        assert exc_info.value.tag == "STRING"

    def test_non_node_is_fatal(self):
        with pytest.raises(UnsupportedVariant):
            to_interchange(3.5)


# =============================================================================
# NUMBERS
# =============================================================================


class TestNumbers:
    def test_int(self):
        assert to_interchange(make_int(42)) == NumberExpr(42)

    def test_double(self):
        result = to_interchange(make_double(0.25))
        assert result == NumberExpr(0.25)
        assert result.is_float

    def test_bigint_beyond_64_bits_is_exact(self):
        value = 2**64 + 12345
        result = to_interchange(bigint_node_from_int(value))

        assert result == NumberExpr(value)
        assert result.is_big_integer

    def test_negative_bigint(self):
        assert to_interchange(bigint_node_from_int(-(10**30))) == NumberExpr(-(10**30))

    def test_bigint_zero(self):
        assert to_interchange(bigint_node_from_int(0)) == NumberExpr(0)

    def test_fraction(self):
        result = to_interchange(make_fraction(make_int(3), make_int(4)))
        assert result == function("Rational", NumberExpr(3), NumberExpr(4))

    def test_complex(self):
        result = to_interchange(make_complex(make_int(3), make_int(4)))
        assert result == function("Complex", NumberExpr(3), NumberExpr(4))


# =============================================================================
# SYMBOLS AND LISTS
# =============================================================================


class TestSymbols:
    def test_variable(self):
        assert to_interchange(make_identifier("x")) == X

    @pytest.mark.parametrize(
        "name, symbol",
        [("pi", "Pi"), ("π", "Pi"), ("e", "ExponentialE"), ("i", "ImaginaryUnit")],
    )
    def test_constants(self, name, symbol):
        assert to_interchange(make_identifier(name)) == SymbolExpr(symbol)

    def test_vector_to_list(self):
        result = to_interchange(make_vector([make_int(1), make_int(2), make_int(3)]))
        assert result == function("List", NumberExpr(1), NumberExpr(2), NumberExpr(3))

    def test_empty_vector(self):
        assert to_interchange(make_vector([])) == FunctionExpr("List")


# =============================================================================
# APPLICATIONS
# =============================================================================


class TestApplications:
    def test_sum_of_power(self, x_squared_plus_one):
        result = to_interchange(x_squared_plus_one)
        assert result == function("Add", function("Power", X, NumberExpr(2)), NumberExpr(1))

    def test_unary_minus_is_negate(self):
        assert to_interchange(app("-", make_identifier("x"))) == function("Negate", X)

    def test_binary_minus_is_subtract(self):
        result = to_interchange(app("-", make_identifier("x"), make_int(1)))
        assert result == function("Subtract", X, NumberExpr(1))

    def test_half_power_is_sqrt(self):
        half = make_fraction(make_int(1), make_int(2))
        assert to_interchange(app("^", make_identifier("x"), half)) == function("Sqrt", X)

    def test_other_power_is_kept(self):
        third = make_fraction(make_int(1), make_int(3))
        result = to_interchange(app("^", make_identifier("x"), third))
        assert result == function(
            "Power", X, function("Rational", NumberExpr(1), NumberExpr(3))
        )

    def test_double_half_is_not_sqrt(self):
        result = to_interchange(app("^", make_identifier("x"), make_double(0.5)))
        assert result.operator == "Power"

    def test_named_function(self):
        assert to_interchange(app("sin", make_identifier("x"))) == function("Sin", X)

    def test_relation(self):
        result = to_interchange(app("=", make_identifier("x"), make_int(1)))
        assert result == function("Equal", X, NumberExpr(1))

    def test_unknown_operator_capitalized(self):
        result = to_interchange(app("frobnicate", make_identifier("x"), make_int(2)))
        assert result == function("Frobnicate", X, NumberExpr(2))

    def test_exp_of_one_stays_exp(self):
        result = to_interchange(app("exp", make_int(1)))
        assert result == function("Exp", NumberExpr(1))

    def test_vector_argument_is_one_list(self):
        vec = make_vector([make_int(1), make_int(2)])
        result = to_interchange(app("sum", vec))
        assert result == function("Sum", function("List", NumberExpr(1), NumberExpr(2)))

    def test_nested_exact_values(self):
        node = app("*", make_fraction(make_int(1), make_int(3)), bigint_node_from_int(2**80))
        result = to_interchange(node)

        rational, big = result.arguments
        assert rational == function("Rational", NumberExpr(1), NumberExpr(3))
        assert big.value == 2**80
        assert not isinstance(big.value, (float, Fraction))
