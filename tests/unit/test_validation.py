"""
Unit tests for record schema validation.

Tests:
- ValidationResult behaviour
- Question, attempt and session schemas
- Error message formatting
"""

import pytest

from adaptive_quiz.models.question import Question
from adaptive_quiz.models.quiz_session import QuizSession
from adaptive_quiz.utils.validation import (
    RECORD_SCHEMAS,
    SchemaValidator,
    ValidationResult,
    get_record_validator,
    validate_record,
)


@pytest.fixture
def question():
    return Question.create(
        subject="Math",
        difficulty="medium",
        text="What is 6 x 7?",
        options={"A": "42", "B": "36"},
        correct_answer="A",
    )


class TestValidationResult:
    """Test suite for ValidationResult class."""

    def test_valid_result_is_truthy(self):
        assert bool(ValidationResult(valid=True, errors=[])) is True

    def test_invalid_result_is_falsy(self):
        assert bool(ValidationResult(valid=False, errors=["error"])) is False

    def test_str_representation(self):
        assert "passed" in str(ValidationResult(valid=True, errors=[])).lower()
        failed = str(ValidationResult(valid=False, errors=["error1", "error2"]))
        assert "2 error(s)" in failed
        assert "error1" in failed


class TestRecordSchemas:
    """Test the bundled schemas against model output."""

    def test_every_table_has_a_schema(self):
        for table in RECORD_SCHEMAS:
            assert isinstance(get_record_validator(table), SchemaValidator)

    def test_unknown_table(self):
        with pytest.raises(KeyError):
            get_record_validator("learners")

    def test_question_valid(self, question):
        result = validate_record("questions", question.to_dict())
        assert result, str(result)

    def test_question_bad_difficulty(self, question):
        data = question.to_dict()
        data["difficulty"] = "expert"
        result = validate_record("questions", data)
        assert not result
        assert any("difficulty" in e for e in result.errors)

    def test_question_needs_two_options(self, question):
        data = question.to_dict()
        data["options"] = {"A": "42"}
        assert not validate_record("questions", data)

    def test_unknown_fields_rejected(self, question):
        data = question.to_dict()
        data["explanation"] = "because"
        assert not validate_record("questions", data)

    def test_session_and_attempts_valid(self, question):
        session = QuizSession(subject="Math")
        attempt = session.record_attempt(question, None, False)
        session.total_questions = 1
        assert validate_record("attempts", attempt.to_dict())
        assert validate_record("sessions", session.to_dict())

    def test_attempt_ability_out_of_range(self, question):
        session = QuizSession(subject="Math", ability=3.5)
        attempt = session.record_attempt(question, "A", True)
        result = validate_record("attempts", attempt.to_dict())
        assert not result
        assert "ability_after" in result.errors[0]

    def test_session_missing_required_field(self):
        data = QuizSession(subject="Math").to_dict()
        del data["subject"]
        result = validate_record("sessions", data)
        assert not result
        assert "root" in result.errors[0]
