"""
Unit tests for the attendance guard.

Tests the email syntax check and the ordered form validation rules.
"""

import pytest

from trip_client.attendance.guard import is_valid_email, validate_guest
from trip_client.shared import messages


class TestIsValidEmail:
    """Tests for the is_valid_email function."""

    @pytest.mark.parametrize(
        "address",
        [
            "guest@example.com",
            "first.last@mail.example.com.br",
            "name+tag@sub.domain.io",
            "a@b.co",
        ],
    )
    def test_accepts_well_formed_addresses(self, address):
        assert is_valid_email(address) is True

    def test_rejects_missing_at(self):
        """Addresses without "@" are rejected."""
        assert is_valid_email("guest.example.com") is False

    def test_rejects_missing_domain(self):
        """Addresses without a domain, or with an undotted one, are rejected."""
        assert is_valid_email("guest@") is False
        assert is_valid_email("guest@example") is False
        assert is_valid_email("guest@.com") is False

    @pytest.mark.parametrize(
        "address",
        ["guest@example.com.", "guest@example..com", "guest@.example.com"],
    )
    def test_rejects_empty_domain_labels(self, address):
        """Domains with a leading, trailing, or doubled dot are rejected."""
        assert is_valid_email(address) is False

    def test_rejects_missing_local_part(self):
        assert is_valid_email("@example.com") is False

    def test_rejects_whitespace(self):
        """Whitespace anywhere in the address is rejected."""
        assert is_valid_email("gu est@example.com") is False
        assert is_valid_email("guest@exa mple.com") is False
        assert is_valid_email(" guest@example.com") is False
        assert is_valid_email("guest@example.com\n") is False

    def test_rejects_multiple_at(self):
        assert is_valid_email("guest@@example.com") is False
        assert is_valid_email("gu@est@example.com") is False

    def test_rejects_empty(self):
        assert is_valid_email("") is False


class TestValidateGuest:
    """Tests for the validate_guest function."""

    def test_valid_form_returns_none(self):
        assert validate_guest("P9", "Ana Souza", "ana@example.com") is None

    def test_surrounding_spaces_in_email_are_tolerated(self):
        """The email is trimmed before the syntax check."""
        assert validate_guest("P9", "Ana", "  ana@example.com  ") is None

    def test_missing_participant(self):
        assert validate_guest(None, "Ana", "ana@example.com") == messages.ATTENDANCE_MISSING_PARTICIPANT
        assert validate_guest("", "Ana", "ana@example.com") == messages.ATTENDANCE_MISSING_PARTICIPANT

    def test_blank_name(self):
        assert validate_guest("P9", "", "ana@example.com") == messages.ATTENDANCE_MISSING_FIELDS
        assert validate_guest("P9", "   ", "ana@example.com") == messages.ATTENDANCE_MISSING_FIELDS

    def test_blank_email(self):
        assert validate_guest("P9", "Ana", "") == messages.ATTENDANCE_MISSING_FIELDS
        assert validate_guest("P9", "Ana", "  ") == messages.ATTENDANCE_MISSING_FIELDS

    def test_malformed_email(self):
        assert validate_guest("P9", "Ana", "ana@example") == messages.ATTENDANCE_INVALID_EMAIL

    def test_participant_checked_first(self):
        """With several problems, the missing participant is reported."""
        assert validate_guest(None, "", "bad") == messages.ATTENDANCE_MISSING_PARTICIPANT
