"""
Exception hierarchy for the adaptive quiz engine.

- NotFoundError: nothing to work with (no questions for a subject, empty catalog)
- StorageError: any persistence read/write failure
- InvalidStateError: an operation was invoked in the wrong session state
- QuestionValidationError: rejected question input from the authoring side
"""

from typing import List, Optional


class QuizError(Exception):
    """Base class for all quiz engine errors."""


class NotFoundError(QuizError):
    """Requested data does not exist."""


class StorageError(QuizError):
    """A store operation failed."""


class InvalidStateError(QuizError):
    """Operation not allowed in the current session state."""


class QuestionValidationError(QuizError):
    """
    Question input failed validation.

    Attributes:
        errors: Every problem found, not just the first
    """

    def __init__(self, errors: List[str], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(
            message
            or f"Invalid question ({len(self.errors)} error(s)): " + "; ".join(self.errors)
        )
