"""
Asynchronous store interface used by the session controller and the catalog.

Every method is a coroutine and raises StorageError on failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from ..models.question import Question
from ..models.quiz_session import Attempt, QuizSession

# Table layout shared by all backends: name -> (key field, {index: field})
TABLES = {
    "questions": ("id", {"by_subject": "subject", "by_difficulty": "difficulty"}),
    "attempts": ("id", {"by_session_id": "session_id"}),
    "sessions": ("id", {"by_start_time": "started_at"}),
}


class QuizStore(ABC):
    """Persistence collaborator for questions, attempts and sessions."""

    # Session controller side

    @abstractmethod
    async def load_questions_by_subject(self, subject: str) -> List[Question]:
        """All questions for a subject, in catalog order."""

    @abstractmethod
    async def load_all_attempts(self) -> List[Attempt]:
        """Every attempt from every session."""

    @abstractmethod
    async def save_attempt(self, attempt: Attempt) -> None:
        """Insert or replace an attempt."""

    @abstractmethod
    async def save_session(self, session: QuizSession) -> None:
        """Insert or replace a session (the current question is not stored)."""

    # Catalog and reporting side

    @abstractmethod
    async def add_question(self, question: Question) -> None:
        """Insert or replace a question."""

    @abstractmethod
    async def load_all_questions(self) -> List[Question]:
        """Every question in the catalog."""

    @abstractmethod
    async def delete_question(self, question_id: str) -> bool:
        """Delete a question; False if it did not exist."""

    @abstractmethod
    async def count_questions(self) -> int:
        """Number of questions in the catalog."""

    @abstractmethod
    async def load_attempts_by_session(self, session_id: str) -> List[Attempt]:
        """Attempts recorded by one session."""

    @abstractmethod
    async def load_sessions(self, newest_first: bool = True) -> List[QuizSession]:
        """Stored sessions ordered by start time."""
