"""
Unit tests for configuration system.

Tests:
- Config singleton and defaults
- Path configuration
- Config validation
"""

import pytest

from adaptive_quiz.config import SELECTION_POLICIES, Config, QuizConfig, config


@pytest.fixture
def restore_quiz_config():
    """Put the global quiz settings back after a test mutates them."""
    original = config.quiz
    config.quiz = QuizConfig()
    yield config.quiz
    config.quiz = original


class TestConfig:
    """Test suite for Config class."""

    def test_config_singleton(self):
        """Test that Config implements singleton pattern."""
        assert Config() is Config()
        assert Config() is config

    def test_quiz_defaults(self, monkeypatch):
        """Test that QuizConfig reads defaults when no env overrides are set."""
        for name in ("QUIZ_MAX_QUESTIONS", "QUIZ_ANSWER_DELAY", "QUIZ_SELECTION_POLICY", "QUIZ_RANDOM_SEED"):
            monkeypatch.delenv(name, raising=False)
        quiz = QuizConfig()
        assert quiz.max_questions == 10
        assert quiz.answer_delay_seconds == 2.0
        assert quiz.selection_policy == "threshold"
        assert quiz.threshold_choices == (2, 3)
        assert quiz.top_candidates == 5
        assert quiz.random_seed is None

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("QUIZ_MAX_QUESTIONS", "5")
        monkeypatch.setenv("QUIZ_SELECTION_POLICY", "continuous")
        monkeypatch.setenv("QUIZ_RANDOM_SEED", "42")
        quiz = QuizConfig()
        assert quiz.max_questions == 5
        assert quiz.selection_policy == "continuous"
        assert quiz.random_seed == 42

    def test_paths_configured(self):
        """Test that all required paths are configured."""
        assert config.paths.data_dir.is_absolute()
        assert config.paths.schemas_dir.exists()
        assert config.paths.question_bank.exists()

    def test_default_config_is_valid(self, restore_quiz_config):
        assert config.validate() == []

    def test_validation_detects_invalid_max_questions(self, restore_quiz_config):
        restore_quiz_config.max_questions = 0
        assert any("max_questions" in err for err in config.validate())

    def test_validation_detects_unknown_policy(self, restore_quiz_config):
        restore_quiz_config.selection_policy = "elo"
        errors = config.validate()
        assert any("selection_policy" in err for err in errors)
        assert "elo" not in SELECTION_POLICIES

    def test_validation_detects_bad_thresholds(self, restore_quiz_config):
        restore_quiz_config.threshold_choices = ()
        assert any("threshold_choices" in err for err in config.validate())
