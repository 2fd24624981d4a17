"""
Schema validation utilities for quiz records.

Provides JSON Schema validation with clear error messages for the three stored
record types (question, attempt, session).
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft7Validator, FormatChecker, ValidationError

SCHEMAS_DIR = Path(__file__).parent.parent / "schemas"

RECORD_SCHEMAS = {
    "questions": "question.schema.json",
    "attempts": "attempt.schema.json",
    "sessions": "session.schema.json",
}


class ValidationResult:
    """
    Result of a validation attempt.

    Attributes:
        valid: Whether data passed validation
        errors: List of error messages
        data: The validated data
    """

    def __init__(self, valid: bool, errors: list[str], data: Any = None):
        self.valid = valid
        self.errors = errors
        self.data = data

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.valid

    def __str__(self) -> str:
        """Human-readable representation."""
        if self.valid:
            return "✓ Validation passed"
        return f"✗ Validation failed with {len(self.errors)} error(s):\n" + "\n".join(
            f"  - {error}" for error in self.errors
        )


class SchemaValidator:
    """
    JSON Schema validator for a single record type.

    Usage:
        validator = SchemaValidator("path/to/schema.json")
        result = validator.validate(data)
        if not result:
            print(result.errors)
    """

    def __init__(self, schema_path: Path | str):
        """
        Initialize validator with a schema file.

        Args:
            schema_path: Path to JSON Schema file
        """
        self.schema_path = Path(schema_path)
        with open(self.schema_path, "r", encoding="utf-8") as f:
            self.schema = json.load(f)
        # Use FormatChecker to validate date-time fields
        self.validator = Draft7Validator(self.schema, format_checker=FormatChecker())

    def validate(self, data: dict) -> ValidationResult:
        """
        Validate data against schema.

        Args:
            data: Data to validate

        Returns:
            ValidationResult with validation status and any errors
        """
        errors = [self._format_error(error) for error in self.validator.iter_errors(data)]
        return ValidationResult(valid=not errors, errors=errors, data=data)

    def _format_error(self, error: ValidationError) -> str:
        """
        Convert ValidationError to human-readable message with details.

        Args:
            error: jsonschema ValidationError

        Returns:
            Formatted error message with validator and schema path
        """
        path = " -> ".join(str(p) for p in error.path) if error.path else "root"
        validator_name = getattr(error, "validator", "unknown")
        schema_path = "/".join(str(p) for p in error.schema_path)
        return (
            f"At '{path}': {error.message} "
            f"[validator={validator_name}, schema_path=/{schema_path}]"
        )


@lru_cache(maxsize=None)
def get_record_validator(table: str, schemas_dir: Optional[str] = None) -> SchemaValidator:
    """
    Get the (cached) validator for a table's records.

    Args:
        table: "questions", "attempts" or "sessions"
        schemas_dir: Override the bundled schemas directory

    Raises:
        KeyError: If the table has no schema
    """
    base = Path(schemas_dir) if schemas_dir else SCHEMAS_DIR
    return SchemaValidator(base / RECORD_SCHEMAS[table])


def validate_record(table: str, record: dict) -> ValidationResult:
    """Convenience function to validate one stored record."""
    return get_record_validator(table).validate(record)
