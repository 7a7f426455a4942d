"""
Tests for the MathJSON contract (JSON Schema) and wire codec.

Checks:
- The shipped schema is itself valid
- Valid expression shapes pass, malformed ones are rejected
- Integers beyond the JSON-safe range are carried exactly as {"num": "..."}
- Decoding validates first
"""

import json
import math
from fractions import Fraction

import pytest
from jsonschema import ValidationError

from cas_interchange.conversion import to_interchange, to_native
from cas_interchange.core.contracts import (
    MAX_SAFE_INTEGER,
    MathJSONValidator,
    SchemaLoader,
    dump_expr,
    dumps,
    load_expr,
    loads,
    validate_mathjson,
)
from cas_interchange.core.domain import NumberExpr, SymbolExpr, function
from cas_interchange.core.errors import UnsupportedVariant
from cas_interchange.core.math import bigint_node_from_int, int_from_bigint_node

X = SymbolExpr("x")


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    def test_load_shipped_schema(self):
        schema = SchemaLoader().load_schema("mathjson")
        assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"

    def test_schema_is_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("mathjson") is loader.load_schema("mathjson")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_invalid_schema_file(self, tmp_path):
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "nowhere")

    def test_validator_reads_contract_from_given_loader(self, tmp_path):
        (tmp_path / "mathjson.json").write_text(json.dumps({"type": "integer"}), encoding="utf-8")
        validator = MathJSONValidator(SchemaLoader(tmp_path))

        assert validator.schema == {"type": "integer"}
        assert validator.is_valid(3)
        assert not validator.is_valid("x")

    def test_default_validator_uses_packaged_contract(self):
        assert MathJSONValidator().schema == SchemaLoader().load_schema("mathjson")


# =============================================================================
# SCHEMA VALIDATION
# =============================================================================


class TestMathJSONSchema:
    @pytest.fixture
    def validator(self) -> MathJSONValidator:
        return MathJSONValidator()

    @pytest.mark.parametrize(
        "data",
        [
            3,
            -2.5,
            "x",
            ["Add", "x", 1],
            ["List"],
            ["Sqrt", ["Power", "x", 2]],
            {"num": "18446744073709551616"},
            {"num": "NaN"},
            {"num": "-Infinity"},
            {"sym": "Pi"},
            {"fn": ["Sin", "x"]},
            ["Add", {"num": "1e400"}, {"sym": "y"}],
        ],
    )
    def test_valid_expressions(self, validator, data):
        assert validator.is_valid(data)

    @pytest.mark.parametrize(
        "data",
        [
            [],
            [1, 2],
            ["Add", True],
            "",
            True,
            None,
            {"num": "twelve"},
            {"num": "1", "sym": "x"},
            {"fn": []},
            {"other": 1},
        ],
    )
    def test_invalid_expressions(self, validator, data):
        assert not validator.is_valid(data)
        assert list(validator.iter_errors(data))

    def test_validate_raises(self):
        with pytest.raises(ValidationError):
            validate_mathjson(["Add", None])

    def test_validate_accepts(self):
        validate_mathjson(["Equal", "x", 1])


# =============================================================================
# ENCODE
# =============================================================================


class TestDump:
    def test_function(self):
        assert dumps(function("Add", X, NumberExpr(1))) == '["Add", "x", 1]'

    def test_safe_integer_stays_number(self):
        assert dump_expr(NumberExpr(MAX_SAFE_INTEGER)) == MAX_SAFE_INTEGER

    def test_large_integer_as_decimal_text(self):
        assert dump_expr(NumberExpr(2**64)) == {"num": "18446744073709551616"}
        assert dump_expr(NumberExpr(-(2**64))) == {"num": "-18446744073709551616"}

    def test_fraction_number(self):
        assert dump_expr(NumberExpr(Fraction(3, 4))) == ["Rational", 3, 4]

    def test_non_finite_floats(self):
        assert dump_expr(NumberExpr(math.nan)) == {"num": "NaN"}
        assert dump_expr(NumberExpr(math.inf)) == {"num": "+Infinity"}
        assert dump_expr(NumberExpr(-math.inf)) == {"num": "-Infinity"}

    def test_dumped_data_is_valid(self):
        expr = function(
            "List",
            NumberExpr(2**80),
            NumberExpr(math.nan),
            function("Rational", NumberExpr(1), NumberExpr(2)),
        )
        assert MathJSONValidator().is_valid(dump_expr(expr))

    def test_non_expression_rejected(self):
        with pytest.raises(UnsupportedVariant):
            dump_expr(3)


# =============================================================================
# DECODE
# =============================================================================


class TestLoad:
    def test_function(self):
        assert loads('["Add", "x", 1]') == function("Add", X, NumberExpr(1))

    def test_big_integer_is_exact(self):
        result = loads('{"num": "123456789012345678901234567890"}')
        assert result == NumberExpr(123456789012345678901234567890)
        assert isinstance(result.value, int)

    def test_decimal_text(self):
        assert loads('{"num": "1.5"}') == NumberExpr(1.5)

    def test_nan(self):
        assert math.isnan(loads('{"num": "NaN"}').value)

    def test_object_forms(self):
        assert load_expr({"sym": "Pi"}) == SymbolExpr("Pi")
        assert load_expr({"fn": ["Sin", "x"]}) == function("Sin", X)

    def test_invalid_data_rejected_before_decoding(self):
        with pytest.raises(ValidationError):
            load_expr([])

    def test_boolean_rejected(self):
        with pytest.raises(ValidationError):
            load_expr(True)
        with pytest.raises(UnsupportedVariant):
            load_expr(True, validate=False)


# =============================================================================
# END TO END
# =============================================================================


class TestWireRoundTrip:
    def test_big_integer_survives_wire(self):
        value = 2**100 + 1
        text = dumps(to_interchange(bigint_node_from_int(value)))
        node = to_native(loads(text))

        assert int_from_bigint_node(node) == value
