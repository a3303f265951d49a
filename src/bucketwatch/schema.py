"""JSON Schema validation for check requests.

Wraps jsonschema Draft7 validation and reports the first error with its
location in the payload.
"""

from __future__ import annotations

from typing import Any, Dict

from jsonschema import Draft7Validator

from .constants import Constants
from .errors import ConfigurationError

_OPTIONAL_STRING = {"type": ["string", "null"]}

SOURCE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "bucket": {"type": "string", "minLength": 1},
        "regexp": _OPTIONAL_STRING,
        "versioned_file": _OPTIONAL_STRING,
        "initial_path": _OPTIONAL_STRING,
        "initial_version": _OPTIONAL_STRING,
        "version_type": {"enum": Constants.SUPPORTED_VERSION_TYPES + [None]},
    },
    "required": ["bucket"],
    # credentials, endpoints and transfer options belong to other collaborators
    "additionalProperties": True,
}

CHECK_REQUEST_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "source": SOURCE_SCHEMA,
        "version": {
            "type": ["object", "null"],
            "properties": {
                "path": _OPTIONAL_STRING,
                "version_id": _OPTIONAL_STRING,
            },
        },
    },
    "required": ["source"],
}


class SchemaError(ConfigurationError):
    """Raised when data fails to validate against a provided schema."""


def validate_input(schema: Dict[str, Any], data: Any) -> None:
    """Validate ``data`` strictly and raise on the first error.

    Args:
        schema: Draft-07 JSON Schema dict.
        data:   Payload to validate.
    """
    validator = Draft7Validator(schema)
    errs = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        raise SchemaError(f"Invalid request at '{path}': {first.message}")
