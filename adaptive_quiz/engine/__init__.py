"""
Adaptive engine: difficulty model, question selection and ability progression.

Selection and progression come in matched pairs. Use build_policy() rather than
mixing a selector from one pair with a progression from the other: the two
pairs have different tie-break and monotonicity rules.
"""

import random
from typing import Optional, Tuple, Union

from .difficulty import (
    DIFFICULTY_MAP,
    DIFFICULTY_ORDER,
    difficulty_for_ability,
    difficulty_rank,
    is_valid_difficulty,
)
from .progression import (
    ContinuousProgression,
    ThresholdProgression,
    clamp_ability,
)
from .selector import (
    TOP_CANDIDATES,
    NearestAbilitySelector,
    ThresholdSelector,
    select_next_question,
)

Selector = Union[ThresholdSelector, NearestAbilitySelector]
Progression = Union[ThresholdProgression, ContinuousProgression]


def build_policy(
    name: str = "threshold",
    rng: Optional[random.Random] = None,
    quiz_config=None,
) -> Tuple[Selector, Progression]:
    """
    Build the (selector, progression) pair for a named policy.

    Args:
        name: "threshold" (default) or "continuous"
        rng: Shared random source; a fresh one if None
        quiz_config: Optional QuizConfig supplying step, bounds and pool size

    Raises:
        ValueError: If the policy name is unknown
    """
    rng = rng or random.Random()
    kwargs = {}
    top_k = TOP_CANDIDATES
    if quiz_config is not None:
        kwargs = {
            "step": quiz_config.ability_step,
            "ability_min": quiz_config.ability_min,
            "ability_max": quiz_config.ability_max,
        }
        top_k = quiz_config.top_candidates

    if name == "threshold":
        if quiz_config is not None:
            kwargs["threshold_choices"] = quiz_config.threshold_choices
        return ThresholdSelector(rng, top_k), ThresholdProgression(rng, **kwargs)
    if name == "continuous":
        return NearestAbilitySelector(rng, top_k), ContinuousProgression(**kwargs)
    raise ValueError(f"Unknown selection policy {name!r}; expected 'threshold' or 'continuous'")


__all__ = [
    "DIFFICULTY_MAP",
    "DIFFICULTY_ORDER",
    "difficulty_for_ability",
    "difficulty_rank",
    "is_valid_difficulty",
    "ThresholdProgression",
    "ContinuousProgression",
    "clamp_ability",
    "ThresholdSelector",
    "NearestAbilitySelector",
    "select_next_question",
    "build_policy",
]
