"""
Difficulty model: discrete labels, their ranks, and ability banding.
"""

from typing import Dict, List

EASY = "easy"
MEDIUM = "medium"
HARD = "hard"

DIFFICULTY_MAP: Dict[str, int] = {
    EASY: 1,
    MEDIUM: 2,
    HARD: 3,
}

# Ascending order, used for the stepwise fallback search
DIFFICULTY_ORDER: List[str] = [EASY, MEDIUM, HARD]

# Band boundaries on the ability scale: [1.0, 1.5) easy, [1.5, 2.5) medium, [2.5, 3.0] hard
MEDIUM_BAND_START = 1.5
HARD_BAND_START = 2.5


def difficulty_rank(label: str) -> int:
    """Return the rank (1-3) for a difficulty label."""
    try:
        return DIFFICULTY_MAP[label]
    except KeyError:
        raise ValueError(
            f"Unknown difficulty {label!r}; expected one of {DIFFICULTY_ORDER}"
        ) from None


def is_valid_difficulty(label) -> bool:
    return label in DIFFICULTY_MAP


def difficulty_for_ability(ability: float) -> str:
    """
    Map a continuous ability value to its target difficulty band.

    Example:
        >>> difficulty_for_ability(1.0)
        'easy'
        >>> difficulty_for_ability(2.5)
        'hard'
    """
    if ability < MEDIUM_BAND_START:
        return EASY
    if ability < HARD_BAND_START:
        return MEDIUM
    return HARD


def harder_than(label: str) -> List[str]:
    """Labels strictly harder than ``label``, nearest first."""
    return DIFFICULTY_ORDER[DIFFICULTY_ORDER.index(label) + 1:]


def easier_than(label: str) -> List[str]:
    """Labels strictly easier than ``label``, nearest first."""
    return list(reversed(DIFFICULTY_ORDER[:DIFFICULTY_ORDER.index(label)]))
