"""
Question model - a single multiple-choice catalog entry.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


def new_question_id() -> str:
    return f"q-{uuid.uuid4()}"


@dataclass(frozen=True)
class Question:
    """
    An immutable multiple-choice question.

    Attributes:
        id: Unique, stable identifier
        subject: Subject label used for catalog lookups
        difficulty: One of "easy", "medium", "hard"
        text: Prompt shown to the learner
        options: Option key -> option text (e.g. {"A": "...", "B": "..."})
        correct_answer: Key of the correct option
        created_at: ISO 8601 creation time, used to find the last added question
    """
    id: str
    subject: str
    difficulty: str
    text: str
    options: Mapping[str, str] = field(hash=False)
    correct_answer: str
    created_at: Optional[str] = None

    def __post_init__(self):
        # Freeze the options mapping so the question is immutable end to end
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def is_correct(self, selected_option: Optional[str]) -> bool:
        """A skip (None) is never correct."""
        return selected_option is not None and selected_option == self.correct_answer

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = {
            "id": self.id,
            "subject": self.subject,
            "difficulty": self.difficulty,
            "text": self.text,
            "options": dict(self.options),
            "correct_answer": self.correct_answer,
        }
        if self.created_at is not None:
            data["created_at"] = self.created_at
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Question":
        return cls(
            id=data["id"],
            subject=data["subject"],
            difficulty=data["difficulty"],
            text=data["text"],
            options=data["options"],
            correct_answer=data["correct_answer"],
            created_at=data.get("created_at"),
        )

    @classmethod
    def create(
        cls,
        subject: str,
        difficulty: str,
        text: str,
        options: Mapping[str, str],
        correct_answer: str,
        question_id: Optional[str] = None,
    ) -> "Question":
        """Build a new question with a generated id and creation timestamp."""
        return cls(
            id=question_id or new_question_id(),
            subject=subject,
            difficulty=difficulty,
            text=text,
            options=options,
            correct_answer=correct_answer,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
