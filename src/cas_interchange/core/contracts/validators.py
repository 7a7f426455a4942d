"""
MathJSON wire contract.

The contract is a Draft 2020-12 JSON Schema shipped as package data
(schema/mathjson.json). A schema is meta-checked once when it is first read;
checking wire data against it is left to jsonschema.
"""

import json
from pathlib import Path
from typing import Any, Dict, Final, Iterator

import jsonschema
from jsonschema import Draft202012Validator

SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"
MATHJSON_SCHEMA: Final[str] = "mathjson"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Reads schema files from one directory, memoized by name."""

    def __init__(self, schema_dir: Path | None = None):
        self.schema_dir = schema_dir or SCHEMA_DIR
        if not self.schema_dir.is_dir():
            raise RuntimeError(f"No schema directory at {self.schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, name: str) -> Dict[str, Any]:
        """
        Read '<name>.json' and check it against the 2020-12 meta-schema.

        Raises:
            FileNotFoundError: no such file in the schema directory
            json.JSONDecodeError: the file is not JSON
            ValueError: the file is JSON but not a usable schema
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        path = self.schema_dir / f"{name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"No schema file {path}")
        schema = json.loads(path.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

        self._cache[name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# VALIDATOR
# =============================================================================


class MathJSONValidator:
    """
    Checks wire data against the MathJSON contract: numbers, symbol strings,
    ["Head", ...] lists and the {"num"} / {"sym"} / {"fn"} object forms.
    """

    def __init__(self, loader: SchemaLoader | None = None):
        """
        Args:
            loader: where to read the contract from (the packaged schema by default)
        """
        self.schema = (loader or _SCHEMA_LOADER).load_schema(MATHJSON_SCHEMA)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Raises:
            jsonschema.ValidationError: the first violation found
        """
        self._validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self._validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[jsonschema.ValidationError]:
        return self._validator.iter_errors(data)


def validate_mathjson(data: Any) -> None:
    """
    Validate MathJSON wire data against the packaged contract.

    Raises:
        jsonschema.ValidationError: if the data is not a MathJSON expression
    """
    MathJSONValidator().validate(data)
