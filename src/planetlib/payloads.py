from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, Optional

import jsonschema

from . import config


class PayloadValidationError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


@lru_cache(maxsize=None)
def load_schema(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def validate_against_schema(obj: Any, schema: dict[str, Any]) -> None:
    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(obj), key=lambda e: len(list(e.absolute_path)))
    if errors:
        error = errors[0]
        details = {
            "path": list(error.absolute_path),
            "schema_path": list(error.absolute_schema_path),
            "message": error.message,
        }
        raise PayloadValidationError("SCHEMA_VIOLATION", "Schema validation failed.", details)


def parse_json_body(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        details = {"message": exc.msg, "line": exc.lineno, "column": exc.colno}
        raise PayloadValidationError("INVALID_JSON", "Response body is not valid JSON.", details)


def validate_page(obj: Any, schema: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """Check a decoded catalog page against the page schema and return it."""
    if not isinstance(obj, dict):
        raise PayloadValidationError("SCHEMA_VIOLATION", "Page must be an object.", {"value": obj})
    validate_against_schema(obj, schema or load_schema(str(config.PAGE_SCHEMA_FILE)))
    return obj


def validate_resident(obj: Any, schema: Optional[dict[str, Any]] = None) -> str:
    """Check a decoded resident record and return its display name."""
    if not isinstance(obj, dict):
        raise PayloadValidationError("SCHEMA_VIOLATION", "Resident must be an object.", {"value": obj})
    validate_against_schema(obj, schema or load_schema(str(config.RESIDENT_SCHEMA_FILE)))
    return obj["name"]
