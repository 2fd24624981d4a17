"""
Adaptive quiz engine.

Picks the next question for a learner from estimated ability and answer
history, tracks the running session and persists questions, attempts and
sessions through a pluggable store.
"""

from .controller import SessionController, SessionState
from .errors import (
    InvalidStateError,
    NotFoundError,
    QuestionValidationError,
    QuizError,
    StorageError,
)
from .models import Attempt, Question, QuizSession
from .observer import QuizObserver

__version__ = "0.1"

__all__ = [
    "SessionController",
    "SessionState",
    "QuizObserver",
    "Question",
    "Attempt",
    "QuizSession",
    "QuizError",
    "NotFoundError",
    "StorageError",
    "InvalidStateError",
    "QuestionValidationError",
]
