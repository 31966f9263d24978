"""
TASKNEST Web - Credential Validation

Form checks run before any call to the remote service.
"""

import re
from typing import Optional

from app.config import settings


EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def validate_credentials(
    email: str,
    password: str,
    min_password_length: Optional[int] = None,
) -> dict[str, str]:
    """
    Validate login/sign-up form input.

    Returns a mapping of field name to error message; empty when the input is valid.
    """
    if min_password_length is None:
        min_password_length = settings.PASSWORD_MIN_LENGTH

    errors: dict[str, str] = {}

    if not email:
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.fullmatch(email):
        errors["email"] = "Email is invalid"

    if not password:
        errors["password"] = "Password is required"
    elif len(password) < min_password_length:
        errors["password"] = f"Password must be at least {min_password_length} characters"

    return errors
