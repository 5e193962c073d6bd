"""
Tests for pre-send validation

Tests cover:
- Required and malformed recipients
- Subject warning that never blocks sending
"""
from courier.core.models import FieldSet
from courier.core.validation import ComposeValidator


class TestComposeValidator:
    """Tests for ComposeValidator.validate"""

    def test_empty_to_invalid(self):
        result = ComposeValidator.validate(FieldSet(to="", subject="Hi"))
        assert not result.is_valid
        assert result.errors["to"] == "At least one recipient is required"

    def test_whitespace_to_invalid(self):
        result = ComposeValidator.validate(FieldSet(to="   ", subject="Hi"))
        assert not result.is_valid

    def test_bad_address_invalid(self):
        result = ComposeValidator.validate(FieldSet(to="not an email", subject="Hi"))
        assert not result.is_valid
        assert result.errors["to"] == "Invalid email address format"

    def test_valid_address(self):
        result = ComposeValidator.validate(FieldSet(to="user@example.com", subject="Hi"))
        assert result.is_valid
        assert result.errors == {}

    def test_empty_subject_only_warns(self):
        """Test an empty subject is reported but does not block"""
        result = ComposeValidator.validate(FieldSet(to="user@example.com"))
        assert result.is_valid
        assert bool(result)
        assert result.warnings == {"subject": "Subject is empty (optional)"}
        assert result.blocking == {}
        assert "subject" in result.errors

    def test_both_problems(self):
        result = ComposeValidator.validate(FieldSet())
        assert not result
        assert set(result.errors) == {"to", "subject"}
        assert set(result.blocking) == {"to"}
