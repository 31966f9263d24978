"""
TASKNEST Web - Credential Validation Tests
"""

import pytest

from app.auth.validation import validate_credentials


class TestEmail:
    def test_missing_email(self):
        errors = validate_credentials("", "longenough1")
        assert errors == {"email": "Email is required"}

    @pytest.mark.parametrize(
        "email",
        [
            "plainaddress",
            "no-at-sign.com",
            "user@",
            "user@domain",
            "@domain.com",
            "user name@domain.com",
            "user@domain .com",
        ],
    )
    def test_malformed_email(self, email):
        errors = validate_credentials(email, "longenough1")
        assert errors == {"email": "Email is invalid"}

    @pytest.mark.parametrize("email", ["a@b.com", "first.last@sub.example.org", "new@x.com"])
    def test_valid_email(self, email):
        assert validate_credentials(email, "longenough1") == {}


class TestPassword:
    def test_missing_password(self):
        errors = validate_credentials("a@b.com", "")
        assert errors == {"password": "Password is required"}

    def test_short_password(self):
        errors = validate_credentials("a@b.com", "short")
        assert errors == {"password": "Password must be at least 8 characters"}

    def test_minimum_length_is_accepted(self):
        assert validate_credentials("a@b.com", "12345678") == {}

    def test_custom_minimum(self):
        errors = validate_credentials("a@b.com", "12345", min_password_length=6)
        assert errors == {"password": "Password must be at least 6 characters"}

    def test_reports_both_fields(self):
        errors = validate_credentials("nope", "")
        assert set(errors) == {"email", "password"}
