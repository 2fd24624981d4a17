"""
Question catalog - authoring operations on top of a QuizStore.

- add_question: validate form input and store a new question
- remove_last_question: undo the most recent addition
- list_subjects: distinct subjects in the catalog
- seed_questions: load the bundled question bank into a sparse store
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .config import config
from .engine.difficulty import DIFFICULTY_ORDER, is_valid_difficulty
from .errors import NotFoundError, QuestionValidationError
from .models.question import Question
from .storage.base import QuizStore

logger = logging.getLogger(__name__)


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def build_question(
    subject: str,
    text: str,
    options: Mapping[str, str],
    correct_answer: str,
    difficulty: str,
    question_id: Optional[str] = None,
) -> Question:
    """
    Validate authoring input and build a Question.

    Option keys and the correct answer are upper-cased; text fields are stripped.

    Raises:
        QuestionValidationError: Listing every problem found
    """
    errors = []

    if _blank(subject):
        errors.append("subject is required")
    if _blank(text):
        errors.append("question text is required")

    options = dict(options or {})
    cleaned_options: Dict[str, str] = {}
    for key, value in options.items():
        if _blank(key) or _blank(value):
            errors.append(f"option {key!r} must have a key and non-empty text")
            continue
        cleaned_options[str(key).strip().upper()] = str(value).strip()
    if len(cleaned_options) < 2:
        errors.append("at least two options are required")

    correct = "" if _blank(correct_answer) else str(correct_answer).strip().upper()
    if not correct:
        errors.append("correct answer is required")
    elif cleaned_options and correct not in cleaned_options:
        errors.append(
            f"correct answer {correct!r} is not one of the options {sorted(cleaned_options)}"
        )

    if not is_valid_difficulty(difficulty):
        errors.append(f"difficulty must be one of {DIFFICULTY_ORDER}, got {difficulty!r}")

    if errors:
        raise QuestionValidationError(errors)

    return Question.create(
        subject=subject.strip(),
        difficulty=difficulty,
        text=text.strip(),
        options=cleaned_options,
        correct_answer=correct,
        question_id=question_id,
    )


async def add_question(
    store: QuizStore,
    subject: str,
    text: str,
    options: Mapping[str, str],
    correct_answer: str,
    difficulty: str,
    question_id: Optional[str] = None,
) -> Question:
    """Validate and store a new question; returns the stored question."""
    question = build_question(subject, text, options, correct_answer, difficulty, question_id)
    await store.add_question(question)
    logger.info("Added %s question %s to '%s'", question.difficulty, question.id, question.subject)
    return question


async def remove_last_question(store: QuizStore) -> Question:
    """
    Delete the most recently added question.

    Questions are ordered by creation time, then id; questions without a
    creation time count as oldest.

    Raises:
        NotFoundError: If the catalog is empty
    """
    questions = await store.load_all_questions()
    if not questions:
        raise NotFoundError("No questions to remove.")

    last = max(questions, key=lambda q: (q.created_at is not None, q.created_at or "", q.id))
    await store.delete_question(last.id)
    logger.info("Removed question %s from '%s'", last.id, last.subject)
    return last


async def list_subjects(store: QuizStore) -> List[str]:
    questions = await store.load_all_questions()
    return sorted({q.subject for q in questions})


def load_question_bank(path: Optional[Path | str] = None) -> List[Dict[str, Any]]:
    """Read a question bank JSON file (the bundled one by default)."""
    path = Path(path) if path else config.paths.question_bank
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


async def seed_questions(
    store: QuizStore,
    bank: Optional[Sequence[Dict[str, Any]]] = None,
) -> int:
    """
    Write the question bank into the store when the store has fewer questions.

    Existing questions with the same id are replaced, others are kept.

    Returns:
        Number of questions written (0 if the store was already complete)
    """
    bank = list(bank) if bank is not None else load_question_bank()
    if await store.count_questions() >= len(bank):
        return 0

    logger.info("Seeding/updating question catalog...")
    for record in bank:
        await store.add_question(Question.from_dict(record))
    logger.info("Question catalog seeded with %d question(s)", len(bank))
    return len(bank)
