"""Schema loading and validation."""

from .validation import SchemaValidationError, load_schema, validate_payload, validate_payload_safe

__all__ = ["SchemaValidationError", "load_schema", "validate_payload", "validate_payload_safe"]
