"""
Question selection policies.

Both policies apply the same two exclusion rules before anything else:
- questions used in the running session are never offered again
- questions used in any past session are only offered once no unseen question
  of any difficulty is left

They differ in how the working pool is narrowed by difficulty:
- ThresholdSelector: exact target band, then harder bands, then easier bands
- NearestAbilitySelector: closest rank to a continuous ability, ties toward easier
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional, Sequence

from ..models.question import Question
from .difficulty import (
    DIFFICULTY_MAP,
    difficulty_for_ability,
    easier_than,
    harder_than,
)

logger = logging.getLogger(__name__)

TOP_CANDIDATES = 5


def _preferred_partition(
    candidates: Iterable[Question],
    session_excluded: Iterable[str],
    past_excluded: Iterable[str],
) -> List[Question]:
    """Drop session-used questions, then prefer never-seen ones."""
    session_excluded = set(session_excluded)
    past_excluded = set(past_excluded or ())

    available = [q for q in candidates if q.id not in session_excluded]
    if not available:
        return []

    unseen = [q for q in available if q.id not in past_excluded]
    if unseen:
        return unseen
    return [q for q in available if q.id in past_excluded]


def _pick(pool: Sequence[Question], rng: random.Random, top_k: int) -> Question:
    return pool[rng.randrange(min(top_k, len(pool)))]


def select_next_question(
    candidates: Iterable[Question],
    session_excluded: Iterable[str],
    target_difficulty: str,
    past_excluded: Optional[Iterable[str]] = None,
    rng: Optional[random.Random] = None,
    top_k: int = TOP_CANDIDATES,
) -> Optional[Question]:
    """
    Pick the next question for a target difficulty band.

    Args:
        candidates: Questions available for the subject
        session_excluded: Ids answered in the running session (never reused)
        target_difficulty: Band implied by the learner's ability
        past_excluded: Ids answered in earlier sessions (avoided when possible)
        rng: Random source (module-level random if None)
        top_k: Pick uniformly among at most this many pool members

    Returns:
        The selected question, or None when every candidate was used this session
    """
    if target_difficulty not in DIFFICULTY_MAP:
        raise ValueError(f"Unknown difficulty {target_difficulty!r}")

    partition = _preferred_partition(candidates, session_excluded, past_excluded)
    if not partition:
        return None

    pool = [q for q in partition if q.difficulty == target_difficulty]

    if not pool:
        # Challenge upward before easing downward
        for label in harder_than(target_difficulty) + easier_than(target_difficulty):
            pool = [q for q in partition if q.difficulty == label]
            if pool:
                logger.info(
                    "No %s questions available, switching to %s", target_difficulty, label
                )
                break
        else:
            pool = partition

    return _pick(pool, rng or random, top_k)


class ThresholdSelector:
    """Band-based selection with harder-first fallback."""

    name = "threshold"

    def __init__(self, rng: Optional[random.Random] = None, top_k: int = TOP_CANDIDATES):
        self.rng = rng or random.Random()
        self.top_k = top_k

    def select(
        self,
        candidates: Iterable[Question],
        session_excluded: Iterable[str],
        ability: float,
        past_excluded: Optional[Iterable[str]] = None,
    ) -> Optional[Question]:
        return select_next_question(
            candidates,
            session_excluded,
            difficulty_for_ability(ability),
            past_excluded,
            rng=self.rng,
            top_k=self.top_k,
        )


class NearestAbilitySelector:
    """
    Legacy selection on a continuous ability score.

    Ranks the preferred partition by distance between difficulty rank and
    ability. Equal distances go to the lower rank (ability 2.0 prefers easy
    over hard); otherwise the incoming order is kept.
    """

    name = "continuous"

    def __init__(self, rng: Optional[random.Random] = None, top_k: int = TOP_CANDIDATES):
        self.rng = rng or random.Random()
        self.top_k = top_k

    def select(
        self,
        candidates: Iterable[Question],
        session_excluded: Iterable[str],
        ability: float,
        past_excluded: Optional[Iterable[str]] = None,
    ) -> Optional[Question]:
        partition = _preferred_partition(candidates, session_excluded, past_excluded)
        if not partition:
            return None

        ranked = sorted(
            partition,
            key=lambda q: (
                abs(DIFFICULTY_MAP[q.difficulty] - ability),
                DIFFICULTY_MAP[q.difficulty],
            ),
        )
        return _pick(ranked, self.rng, self.top_k)
