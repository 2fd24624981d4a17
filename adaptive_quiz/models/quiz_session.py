"""
Quiz session records - the running session and the attempts it produces.

A QuizSession is created at quiz start, mutated by the session controller as
answers come in, and persisted once when the quiz ends. Attempts are immutable
and owned by the session that produced them.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set

from .question import Question


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Attempt:
    """
    Learner's response to one question.

    Attributes:
        id: Attempt identifier
        session_id: Owning session
        question_id: Question answered
        selected_option: Option key chosen, or None when skipped
        is_correct: Whether the selection matched the correct option
        difficulty: Difficulty label of the question
        timestamp: ISO 8601 time the attempt was recorded
        ability_after: Session ability after this attempt was applied
    """
    id: str
    session_id: str
    question_id: str
    selected_option: Optional[str]
    is_correct: bool
    difficulty: str
    timestamp: str
    ability_after: float

    @property
    def skipped(self) -> bool:
        return self.selected_option is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "session_id": self.session_id,
            "question_id": self.question_id,
            "selected_option": self.selected_option,
            "is_correct": self.is_correct,
            "difficulty": self.difficulty,
            "timestamp": self.timestamp,
            "ability_after": self.ability_after,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Attempt":
        return cls(
            id=data["id"],
            session_id=data["session_id"],
            question_id=data["question_id"],
            selected_option=data.get("selected_option"),
            is_correct=bool(data["is_correct"]),
            difficulty=data["difficulty"],
            timestamp=data["timestamp"],
            ability_after=float(data["ability_after"]),
        )


@dataclass
class QuizSession:
    """
    One quiz run for a subject.

    Attributes:
        id: Session identifier
        subject: Subject being quizzed
        started_at: ISO 8601 start time
        ended_at: ISO 8601 end time (None while running)
        ability: Current ability rank in [1.0, 3.0]
        score: Number of correct answers so far
        total_questions: Number of answered or skipped questions so far
        history: Attempts in the order they were recorded
        correct_streak: Consecutive correct answers since the last advancement
        threshold: Correct answers needed to advance to the next band
        current_question: Question on screen; cleared after each answer
    """
    subject: str
    id: str = field(default_factory=lambda: f"qs-{uuid.uuid4()}")
    started_at: str = field(default_factory=utc_now)
    ended_at: Optional[str] = None
    ability: float = 1.0
    score: int = 0
    total_questions: int = 0
    history: List[Attempt] = field(default_factory=list)
    correct_streak: int = 0
    threshold: int = 2
    current_question: Optional[Question] = None

    @property
    def answered_ids(self) -> Set[str]:
        """Question ids used in this session (the hard exclusion set)."""
        return {attempt.question_id for attempt in self.history}

    @property
    def is_finished(self) -> bool:
        return self.ended_at is not None

    def record_attempt(
        self,
        question: Question,
        selected_option: Optional[str],
        is_correct: bool,
    ) -> Attempt:
        """
        Append an attempt for ``question`` using the current ability.

        Raises:
            ValueError: If the question was already answered in this session
        """
        if question.id in self.answered_ids:
            raise ValueError(f"Question {question.id} already answered in session {self.id}")

        attempt = Attempt(
            id=f"at-{uuid.uuid4()}",
            session_id=self.id,
            question_id=question.id,
            selected_option=selected_option,
            is_correct=is_correct,
            difficulty=question.difficulty,
            timestamp=utc_now(),
            ability_after=self.ability,
        )
        self.history.append(attempt)
        return attempt

    def to_dict(self) -> Dict[str, Any]:
        """Convert quiz session to dictionary for persistence (current question excluded)."""
        return {
            "id": self.id,
            "subject": self.subject,
            "started_at": self.started_at,
            "ended_at": self.ended_at,
            "ability": self.ability,
            "score": self.score,
            "total_questions": self.total_questions,
            "history": [attempt.to_dict() for attempt in self.history],
            "correct_streak": self.correct_streak,
            "threshold": self.threshold,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuizSession":
        return cls(
            id=data["id"],
            subject=data["subject"],
            started_at=data["started_at"],
            ended_at=data.get("ended_at"),
            ability=float(data.get("ability", 1.0)),
            score=int(data.get("score", 0)),
            total_questions=int(data.get("total_questions", 0)),
            history=[Attempt.from_dict(a) for a in data.get("history", [])],
            correct_streak=int(data.get("correct_streak", 0)),
            threshold=int(data.get("threshold", 2)),
        )
