"""
Session Controller - runs one adaptive quiz from start to finish.

Orchestrates the quiz loop:
1. Load the subject's questions and the ids answered in past sessions
2. Ask the selector for a question and hand it to the observer
3. Grade the answer, update ability, record and persist the attempt
4. After a short delay, move on until the cap is reached or questions run out
5. Persist the finished session and report results

State machine: Idle -> Active -> Finished. One controller instance owns all of
its state; nothing is shared between instances.
"""

from __future__ import annotations

import asyncio
import logging
import random
from enum import Enum
from typing import List, Optional, Set

from .config import config as default_config
from .engine import build_policy
from .errors import InvalidStateError, NotFoundError, QuizError, StorageError
from .models.question import Question
from .models.quiz_session import Attempt, QuizSession, utc_now
from .observer import QuizObserver
from .storage.base import QuizStore
from .utils.analytics import session_snapshot

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    FINISHED = "finished"


class SessionController:
    """
    Drives a single quiz session against a store and an observer.

    Usage:
        controller = SessionController(store, observer)
        await controller.start("Math")
        await controller.answer("B")
        ...
        await controller.finish()
    """

    def __init__(
        self,
        store: QuizStore,
        observer: Optional[QuizObserver] = None,
        quiz_config=None,
        rng: Optional[random.Random] = None,
        policy: Optional[str] = None,
    ):
        """
        Initialize the controller.

        Args:
            store: Persistence collaborator
            observer: UI collaborator (a no-op observer if None)
            quiz_config: QuizConfig to use (global config.quiz if None)
            rng: Random source shared by selection and progression
            policy: "threshold" or "continuous" (quiz_config.selection_policy if None)
        """
        self.store = store
        self.observer = observer or QuizObserver()
        self.quiz_config = quiz_config or default_config.quiz

        if rng is None and self.quiz_config.random_seed is not None:
            rng = random.Random(self.quiz_config.random_seed)
        self.selector, self.progression = build_policy(
            policy or self.quiz_config.selection_policy, rng=rng, quiz_config=self.quiz_config
        )

        self.state = SessionState.IDLE
        self._session: Optional[QuizSession] = None
        self._questions: List[Question] = []
        self._session_answered: Set[str] = set()
        self._past_answered: Set[str] = set()
        self._pending: Optional[asyncio.Task] = None
        self._background: Set[asyncio.Task] = set()

    # ==================== Properties ====================

    @property
    def session(self) -> Optional[QuizSession]:
        """The active session, or None when idle or finished."""
        return self._session

    @property
    def is_active(self) -> bool:
        return self._session is not None

    @property
    def max_questions(self) -> int:
        return self.quiz_config.max_questions

    @property
    def transition_pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    # ==================== Lifecycle ====================

    async def start(self, subject: str) -> QuizSession:
        """
        Start a new session for ``subject`` and show the first question.

        Raises:
            InvalidStateError: If a session is already active
            NotFoundError: If the subject has no questions
            StorageError: If the store could not be read
        """
        if self._session is not None:
            raise InvalidStateError(
                f"Session {self._session.id} is still active. Finish it before starting another."
            )

        try:
            questions = await self.store.load_questions_by_subject(subject)
            if not questions:
                raise NotFoundError(f"No questions found for subject '{subject}'")
            past_attempts = await self.store.load_all_attempts()
        except NotFoundError as e:
            logger.warning("%s", e)
            self.observer.on_error(str(e))
            raise
        except StorageError as e:
            logger.error("Failed to start quiz for '%s': %s", subject, e)
            self.observer.on_error("Error starting quiz.")
            raise

        self._questions = list(questions)
        self._past_answered = {attempt.question_id for attempt in past_attempts}
        self._session_answered = set()

        session = QuizSession(subject=subject)
        self.progression.start(session)
        self._session = session
        self.state = SessionState.ACTIVE
        logger.info(
            "Started session %s for '%s' with %d question(s), %d seen before",
            session.id,
            subject,
            len(self._questions),
            len(self._past_answered & {q.id for q in self._questions}),
        )

        await self.advance()
        if self._session is not None:
            self.observer.on_analytics_changed(session_snapshot(self._session))
        return session

    async def advance(self) -> Optional[Question]:
        """
        Show the next question, or finish when the cap is reached or none is left.

        Returns:
            The question now on screen, or None if the session ended, none was
            active, or the next question is already scheduled
        """
        session = self._session
        if session is None:
            logger.debug("advance() ignored: no active session")
            return None
        if self.transition_pending:
            logger.debug("advance() ignored: next question already scheduled")
            return None

        if session.total_questions >= self.max_questions:
            await self.finish()
            return None

        question = self.selector.select(
            self._questions, self._session_answered, session.ability, self._past_answered
        )
        if question is None:
            logger.info("Session %s ran out of questions", session.id)
            await self.finish()
            return None

        session.current_question = question
        self.observer.on_question_ready(question, session.total_questions + 1, self.max_questions)
        return question

    async def answer(self, selected_option: Optional[str]) -> Optional[Attempt]:
        """
        Grade the answer to the question on screen (None means skip).

        Ignored while no question is on screen, including the window between an
        answer and the next question.

        Returns:
            The recorded attempt, or None if the call was ignored
        """
        try:
            session, question = self._require_current_question()
        except InvalidStateError as e:
            logger.debug("answer() ignored: %s", e)
            return None

        is_correct = question.is_correct(selected_option)

        session.total_questions += 1
        if is_correct:
            session.score += 1

        if self.progression.record(session, is_correct):
            logger.info("Session %s advanced to ability %.1f", session.id, session.ability)

        attempt = session.record_attempt(question, selected_option, is_correct)
        self._session_answered.add(question.id)
        session.current_question = None

        self._spawn(self._save_attempt(attempt))

        self.observer.on_answer_resolved(selected_option, question.correct_answer)
        self.observer.on_analytics_changed(session_snapshot(session))

        self._pending = asyncio.get_running_loop().create_task(self._advance_after_delay())
        return attempt

    async def finish(self, silent: bool = False) -> Optional[QuizSession]:
        """
        End the session, persist it and notify the observer.

        Calling finish without an active session does nothing.

        Args:
            silent: Return to the subject list instead of showing results

        Returns:
            The finalized session, or None if no session was active

        Raises:
            StorageError: If the session could not be saved (it is discarded anyway)
        """
        session = self._session
        if session is None:
            return None

        # Detach first so concurrent finish() calls become no-ops
        self._session = None
        self.state = SessionState.FINISHED
        self._cancel_pending()

        session.current_question = None
        session.ended_at = utc_now()

        try:
            await self.store.save_session(session)
        except StorageError as e:
            logger.error("Failed to save session %s: %s", session.id, e)
            self.observer.on_error("Failed to save quiz results.")
            raise

        logger.info(
            "Finished session %s: %d/%d correct, ability %.1f",
            session.id,
            session.score,
            session.total_questions,
            session.ability,
        )
        if silent:
            self.observer.on_return_to_subjects()
        else:
            self.observer.on_session_finished(session_snapshot(session))
        return session

    async def wait_idle(self) -> None:
        """Wait for the pending transition and any in-flight attempt saves."""
        while self.transition_pending or self._background:
            pending = [t for t in [self._pending, *self._background] if t is not None and not t.done()]
            if not pending:
                break
            await asyncio.gather(*pending, return_exceptions=True)

    # ==================== Internals ====================

    def _require_current_question(self):
        if self._session is None:
            raise InvalidStateError("No active session")
        if self.transition_pending:
            raise InvalidStateError("Previous answer is still being processed")
        if self._session.current_question is None:
            raise InvalidStateError("No question on screen")
        return self._session, self._session.current_question

    async def _advance_after_delay(self) -> None:
        await asyncio.sleep(self.quiz_config.answer_delay_seconds)
        # Clear the marker so advance() sees a settled session
        self._pending = None
        try:
            await self.advance()
        except QuizError as e:
            # finish() already logged and alerted the observer
            logger.debug("Automatic advance ended with %s", e)

    def _cancel_pending(self) -> None:
        pending = self._pending
        self._pending = None
        if pending is not None and pending is not asyncio.current_task() and not pending.done():
            pending.cancel()

    async def _save_attempt(self, attempt: Attempt) -> None:
        try:
            await self.store.save_attempt(attempt)
        except StorageError as e:
            logger.error("Failed to save attempt %s: %s", attempt.id, e)

    def _spawn(self, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
