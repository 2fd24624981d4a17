"""
Shared pytest fixtures and configuration for adaptive quiz tests.

This file is automatically discovered by pytest and provides
fixtures available to all tests.
"""

import random
import sys
from pathlib import Path

import pytest

# Add project root to path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent))

from adaptive_quiz.config import QuizConfig
from adaptive_quiz.models.question import Question
from adaptive_quiz.storage import MemoryQuizStore


def make_question(qid, difficulty="easy", subject="Math", correct="A"):
    return Question(
        id=qid,
        subject=subject,
        difficulty=difficulty,
        text=f"Question {qid}?",
        options={"A": "first", "B": "second", "C": "third", "D": "fourth"},
        correct_answer=correct,
    )


@pytest.fixture
def question_pool():
    """
    Fixture providing a balanced pool of questions for one subject.

    Returns:
        list: 4 easy, 4 medium and 4 hard questions, in that order
    """
    return [
        make_question(f"{label[0]}{i}", label)
        for label in ("easy", "medium", "hard")
        for i in range(1, 5)
    ]


@pytest.fixture
def rng():
    """Seeded random source so selection is reproducible."""
    return random.Random(1234)


@pytest.fixture
def fast_quiz_config():
    """QuizConfig with no delay between questions."""
    return QuizConfig(answer_delay_seconds=0.0, selection_policy="threshold", random_seed=None)


@pytest.fixture
def memory_store():
    return MemoryQuizStore()


# Pytest hooks for better test output


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark tests in unit/ directory as unit tests
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Mark tests in integration/ directory as integration tests
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
