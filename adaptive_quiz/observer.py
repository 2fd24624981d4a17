"""
UI-facing callback contract for the session controller.

The controller never touches a rendering technology; it only calls these
methods. Subclass QuizObserver and override what the host needs. Every
default implementation does nothing.
"""

from typing import Any, Dict, Optional

from .models.question import Question


class QuizObserver:
    """Receives session events from a SessionController."""

    def on_question_ready(self, question: Question, position: int, total: int) -> None:
        """A new question should be displayed (position is 1-based)."""

    def on_answer_resolved(self, selected_option: Optional[str], correct_option: str) -> None:
        """The learner's answer has been graded (selected_option is None on skip)."""

    def on_analytics_changed(self, snapshot: Dict[str, Any]) -> None:
        """Session counters or ability changed."""

    def on_session_finished(self, snapshot: Dict[str, Any]) -> None:
        """The session ended and its final results should be shown."""

    def on_return_to_subjects(self) -> None:
        """The session ended silently; go back to the subject list."""

    def on_error(self, message: str) -> None:
        """A user-visible failure occurred (alert-style notification)."""
