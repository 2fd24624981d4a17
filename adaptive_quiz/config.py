"""
Configuration management for the adaptive quiz engine.

This module centralizes all configuration settings following 12-factor app principles:
- Tunables loaded from environment variables (and a local .env file)
- Sensible defaults for development
- Single source of truth for all settings
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

PACKAGE_DIR = Path(__file__).parent

SELECTION_POLICIES = ("threshold", "continuous")


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else None


@dataclass
class QuizConfig:
    """Adaptive quiz parameters."""

    # Session length and pacing
    max_questions: int = field(
        default_factory=lambda: int(os.getenv("QUIZ_MAX_QUESTIONS", "10"))
    )
    answer_delay_seconds: float = field(
        default_factory=lambda: float(os.getenv("QUIZ_ANSWER_DELAY", "2.0"))
    )

    # "threshold" (streak-based, monotonic) or "continuous" (legacy +/- step)
    selection_policy: str = field(
        default_factory=lambda: os.getenv("QUIZ_SELECTION_POLICY", "threshold")
    )

    # Ability scale: 1.0 = easy, 2.0 = medium, 3.0 = hard
    ability_min: float = 1.0
    ability_max: float = 3.0
    ability_step: float = 0.5
    threshold_choices: Tuple[int, ...] = (2, 3)

    # Random pick among the first N members of the working pool
    top_candidates: int = 5

    # Reproducibility
    random_seed: Optional[int] = field(
        default_factory=lambda: _optional_int("QUIZ_RANDOM_SEED")
    )


@dataclass
class PathConfig:
    """File system paths - single source of truth for all directories."""

    data_dir: Path = field(
        default_factory=lambda: Path(os.getenv("QUIZ_DATA_DIR", "data/quiz")).resolve()
    )
    schemas_dir: Path = field(default_factory=lambda: PACKAGE_DIR / "schemas")
    question_bank: Path = field(
        default_factory=lambda: PACKAGE_DIR / "data" / "question_bank.json"
    )

    def prepare_filesystem(self):
        """
        Create the data directory if it doesn't exist.

        Separated from __post_init__ to avoid side-effects on import.
        Call this explicitly from your app entrypoint.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = field(default_factory=lambda: os.getenv("QUIZ_LOG_LEVEL", "INFO"))


class Config:
    """
    Main configuration class. Singleton pattern.

    Usage:
        from adaptive_quiz.config import config

        cap = config.quiz.max_questions
        config.prepare_fs()
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.quiz = QuizConfig()
            cls._instance.paths = PathConfig()
            cls._instance.logging = LoggingConfig()
        return cls._instance

    def prepare_fs(self):
        """Prepare filesystem (create directories). Call once at startup."""
        self.paths.prepare_filesystem()

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []
        quiz = self.quiz

        if quiz.max_questions < 1:
            errors.append(f"max_questions must be >= 1, got {quiz.max_questions}")

        if quiz.answer_delay_seconds < 0:
            errors.append(
                f"answer_delay_seconds must be >= 0, got {quiz.answer_delay_seconds}"
            )

        if quiz.selection_policy not in SELECTION_POLICIES:
            errors.append(
                f"selection_policy must be one of {SELECTION_POLICIES}, got {quiz.selection_policy!r}"
            )

        if not (quiz.ability_min < quiz.ability_max):
            errors.append(
                f"ability_min ({quiz.ability_min}) must be < ability_max ({quiz.ability_max})"
            )

        if quiz.ability_step <= 0:
            errors.append(f"ability_step must be > 0, got {quiz.ability_step}")

        if not quiz.threshold_choices or min(quiz.threshold_choices) < 1:
            errors.append(
                f"threshold_choices must be non-empty and >= 1, got {quiz.threshold_choices}"
            )

        if quiz.top_candidates < 1:
            errors.append(f"top_candidates must be >= 1, got {quiz.top_candidates}")

        if not self.paths.schemas_dir.exists():
            errors.append(f"Schemas directory not found: {self.paths.schemas_dir}")

        return errors


# Global config instance
config = Config()
