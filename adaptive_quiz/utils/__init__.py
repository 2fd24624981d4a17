"""
Utility modules for the adaptive quiz.

This module contains utility functions:
- validation: JSON Schema validation for stored records
- analytics: Session counters and chart series
- log: Logging setup for entrypoints
"""

from .validation import (
    SchemaValidator,
    ValidationResult,
    get_record_validator,
    validate_record,
)
from .analytics import (
    accuracy_percent,
    session_analytics,
    difficulty_series,
    accuracy_by_difficulty,
    session_snapshot,
)
from .log import configure_logging

__all__ = [
    # Validation
    "SchemaValidator",
    "ValidationResult",
    "get_record_validator",
    "validate_record",
    # Analytics
    "accuracy_percent",
    "session_analytics",
    "difficulty_series",
    "accuracy_by_difficulty",
    "session_snapshot",
    # Logging
    "configure_logging",
]
