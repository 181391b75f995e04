"""Shared schema validation utilities.

Configuration payloads are validated using JSON Schema. Schemas are stored as
YAML files under ``nextlayer/data/schemas/`` and loaded in one consistent way.
"""
from __future__ import annotations

from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator

from nextlayer.core.exceptions import ConfigError
from nextlayer.data import get_data_path
from nextlayer.core.utils.io import read_yaml


class SchemaValidationError(ConfigError):
    """Raised when schema validation fails."""


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema dict.

    Automatically appends ``.yaml`` if no extension is present.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"

    schema_path = get_data_path("schemas", schema_name)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_name}")

    schema = read_yaml(schema_path, default=None, raise_on_error=True)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def validate_payload(payload: Dict[str, Any], schema_name: str) -> None:
    """Validate a payload against a bundled schema.

    Raises:
        SchemaValidationError: If validation fails.
    """
    schema = load_schema(schema_name)
    try:
        jsonschema.validate(instance=payload, schema=schema)
    except jsonschema.ValidationError as exc:
        location = ".".join(str(p) for p in exc.absolute_path) or "<root>"
        raise SchemaValidationError(
            f"Validation failed against schema '{schema_name}' at {location}: {exc.message}",
            context={"schema": schema_name, "path": location},
        ) from exc


def validate_payload_safe(payload: Dict[str, Any], schema_name: str) -> List[str]:
    """Validate a payload and return list of error messages (empty if valid)."""
    try:
        schema = load_schema(schema_name)
    except (OSError, ValueError) as e:
        return [f"Schema loading failed: {e}"]

    errors: List[str] = []
    validator = Draft202012Validator(schema)
    for error in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path]):
        location = ".".join(str(p) for p in error.absolute_path) or "<root>"
        errors.append(f"{location}: {error.message}")
    return errors


__all__ = ["SchemaValidationError", "load_schema", "validate_payload", "validate_payload_safe"]
