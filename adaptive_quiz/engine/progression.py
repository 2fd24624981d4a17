"""
Ability progression policies.

ThresholdProgression (default): ability only moves up, one step at a time,
after a randomized streak (2 or 3) of correct answers at the current band.
Wrong or skipped answers reset the streak and never lower the ability.

ContinuousProgression (legacy): every answer moves ability one step, up when
correct and down otherwise.
"""

from __future__ import annotations

import random
from typing import Optional, Sequence

from ..models.quiz_session import QuizSession

ABILITY_MIN = 1.0
ABILITY_MAX = 3.0
ABILITY_STEP = 0.5
THRESHOLD_CHOICES = (2, 3)


def clamp_ability(value: float, low: float = ABILITY_MIN, high: float = ABILITY_MAX) -> float:
    return max(low, min(high, value))


class ThresholdProgression:
    """Streak-and-threshold state machine; ability is monotonically non-decreasing."""

    name = "threshold"

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        step: float = ABILITY_STEP,
        ability_min: float = ABILITY_MIN,
        ability_max: float = ABILITY_MAX,
        threshold_choices: Sequence[int] = THRESHOLD_CHOICES,
    ):
        self.rng = rng or random.Random()
        self.step = step
        self.ability_min = ability_min
        self.ability_max = ability_max
        self.threshold_choices = tuple(threshold_choices)

    def draw_threshold(self) -> int:
        return self.rng.choice(self.threshold_choices)

    def start(self, session: QuizSession) -> None:
        """Every session begins at the easiest band, whatever happened before."""
        session.ability = self.ability_min
        session.correct_streak = 0
        session.threshold = self.draw_threshold()

    def record(self, session: QuizSession, is_correct: bool) -> bool:
        """
        Apply one answered or skipped question.

        Returns:
            True if this answer advanced the ability
        """
        if not is_correct:
            session.correct_streak = 0
            return False

        session.correct_streak += 1
        if session.correct_streak < session.threshold:
            return False

        session.ability = clamp_ability(
            session.ability + self.step, self.ability_min, self.ability_max
        )
        session.correct_streak = 0
        session.threshold = self.draw_threshold()
        return True


class ContinuousProgression:
    """Fixed step up on correct, down on incorrect or skipped."""

    name = "continuous"

    def __init__(
        self,
        step: float = ABILITY_STEP,
        ability_min: float = ABILITY_MIN,
        ability_max: float = ABILITY_MAX,
    ):
        self.step = step
        self.ability_min = ability_min
        self.ability_max = ability_max

    def start(self, session: QuizSession) -> None:
        session.ability = self.ability_min
        session.correct_streak = 0

    def record(self, session: QuizSession, is_correct: bool) -> bool:
        previous = session.ability
        if is_correct:
            session.correct_streak += 1
            delta = self.step
        else:
            session.correct_streak = 0
            delta = -self.step
        session.ability = clamp_ability(previous + delta, self.ability_min, self.ability_max)
        return session.ability > previous
