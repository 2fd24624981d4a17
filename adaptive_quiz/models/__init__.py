"""
Data models for the adaptive quiz.

This module contains core data models:
- Question: Immutable catalog entry
- Attempt: One answered or skipped question
- QuizSession: A running or finished quiz
"""

from .question import Question, new_question_id
from .quiz_session import Attempt, QuizSession

__all__ = [
    "Question",
    "new_question_id",
    "Attempt",
    "QuizSession",
]
