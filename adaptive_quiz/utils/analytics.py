"""
Session analytics helpers for the results view.

Provides:
- Headline counters (answered, correct, accuracy, ability)
- Difficulty-per-question series for the performance chart
- Accuracy broken down by difficulty band
"""

from __future__ import annotations

import math
from typing import Any, Dict, List

from ..engine.difficulty import DIFFICULTY_MAP, DIFFICULTY_ORDER
from ..models.quiz_session import QuizSession


def accuracy_percent(correct: int, answered: int) -> int:
    """Percentage rounded half up (1/8 -> 13); 0 when nothing was answered."""
    if answered <= 0:
        return 0
    return math.floor(correct * 100 / answered + 0.5)


def session_analytics(session: QuizSession) -> Dict[str, Any]:
    """
    Headline counters for a session.

    Example:
        >>> s = QuizSession(subject="Math", score=3, total_questions=4, ability=1.5)
        >>> session_analytics(s)["accuracy"]
        75
    """
    return {
        "answered": session.total_questions,
        "correct": session.score,
        "accuracy": accuracy_percent(session.score, session.total_questions),
        "ability": round(session.ability, 2),
    }


def difficulty_series(session: QuizSession) -> List[Dict[str, Any]]:
    """
    One point per attempt: label "Q<n>", difficulty rank (1-3), correctness.

    Feeds a line chart of question difficulty over the session.
    """
    return [
        {
            "label": f"Q{index}",
            "rank": DIFFICULTY_MAP[attempt.difficulty],
            "correct": attempt.is_correct,
        }
        for index, attempt in enumerate(session.history, start=1)
    ]


def accuracy_by_difficulty(session: QuizSession) -> Dict[str, Dict[str, int]]:
    """Answered/correct/accuracy per difficulty label (all three labels present)."""
    breakdown = {label: {"answered": 0, "correct": 0} for label in DIFFICULTY_ORDER}
    for attempt in session.history:
        bucket = breakdown[attempt.difficulty]
        bucket["answered"] += 1
        if attempt.is_correct:
            bucket["correct"] += 1

    for bucket in breakdown.values():
        bucket["accuracy"] = accuracy_percent(bucket["correct"], bucket["answered"])
    return breakdown


def session_snapshot(session: QuizSession) -> Dict[str, Any]:
    """Serialized session plus headline analytics, as handed to observers."""
    snapshot = session.to_dict()
    snapshot["analytics"] = session_analytics(session)
    return snapshot
