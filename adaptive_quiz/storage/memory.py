"""
In-memory store backed by indexed tables.

Also the base for file-backed stores: subclasses override _ensure_loaded,
_before_put and _commit to add loading, validation and flushing.
"""

from __future__ import annotations

from typing import Dict, List

from ..errors import StorageError
from ..models.question import Question
from ..models.quiz_session import Attempt, QuizSession
from .base import TABLES, QuizStore
from .table import Table


class MemoryQuizStore(QuizStore):
    """Process-local store; contents are lost when the object goes away."""

    def __init__(self):
        self.tables: Dict[str, Table] = {
            name: Table(name, key=key, indexes=indexes)
            for name, (key, indexes) in TABLES.items()
        }

    # Hooks

    async def _ensure_loaded(self) -> None:
        """Make table contents available before any read or write."""

    def _before_put(self, table: str, record: dict) -> None:
        """Inspect a record before it is stored."""

    async def _commit(self, table: str) -> None:
        """Persist a table after it changed."""

    def _decode(self, model, table: str, records: List[dict]) -> list:
        """Turn stored records into model objects; malformed records raise StorageError."""
        try:
            return [model.from_dict(r) for r in records]
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Malformed {table} record: {e!r}") from e

    async def _put(self, table: str, record: dict) -> None:
        await self._ensure_loaded()
        self._before_put(table, record)
        target = self.tables[table]
        previous = target.get(record[target.key])
        target.put(record)
        try:
            await self._commit(table)
        except StorageError:
            # Keep memory in step with what was persisted
            if previous is None:
                target.delete(record[target.key])
            else:
                target.put(previous)
            raise

    # Session controller side

    async def load_questions_by_subject(self, subject: str) -> List[Question]:
        await self._ensure_loaded()
        return self._decode(
            Question, "questions", self.tables["questions"].get_all_by_index("by_subject", subject)
        )

    async def load_all_attempts(self) -> List[Attempt]:
        await self._ensure_loaded()
        return self._decode(Attempt, "attempts", self.tables["attempts"].all())

    async def save_attempt(self, attempt: Attempt) -> None:
        await self._put("attempts", attempt.to_dict())

    async def save_session(self, session: QuizSession) -> None:
        await self._put("sessions", session.to_dict())

    # Catalog and reporting side

    async def add_question(self, question: Question) -> None:
        await self._put("questions", question.to_dict())

    async def load_all_questions(self) -> List[Question]:
        await self._ensure_loaded()
        return self._decode(Question, "questions", self.tables["questions"].all())

    async def delete_question(self, question_id: str) -> bool:
        await self._ensure_loaded()
        questions = self.tables["questions"]
        previous = questions.get(question_id)
        if previous is None:
            return False
        questions.delete(question_id)
        try:
            await self._commit("questions")
        except StorageError:
            questions.put(previous)
            raise
        return True

    async def count_questions(self) -> int:
        await self._ensure_loaded()
        return len(self.tables["questions"])

    async def load_attempts_by_session(self, session_id: str) -> List[Attempt]:
        await self._ensure_loaded()
        return self._decode(
            Attempt, "attempts", self.tables["attempts"].get_all_by_index("by_session_id", session_id)
        )

    async def load_sessions(self, newest_first: bool = True) -> List[QuizSession]:
        await self._ensure_loaded()
        records = self.tables["sessions"].ordered_by("by_start_time", reverse=newest_first)
        return self._decode(QuizSession, "sessions", records)
