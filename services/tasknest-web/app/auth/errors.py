"""
TASKNEST Web - Authentication Error Messages

Narrows the remote service's error surface to a small set of user-facing strings.
The login page keys its presentation off these exact phrases.
"""

from typing import Optional


INVALID_CREDENTIALS_PHRASE = "Invalid login credentials"
EMAIL_NOT_CONFIRMED_PHRASE = "Email not confirmed"
EMAIL_NOT_CONFIRMED_CODE = "email_not_confirmed"

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
EMAIL_NOT_CONFIRMED_MESSAGE = (
    "Please check your email and confirm your account before signing in."
)
CONFIRMATION_REQUIRED_MESSAGE = (
    "Account created. Please check your email to confirm your account, then sign in."
)
TIMEOUT_MESSAGE = (
    "The request is taking too long. Please check your connection and try again."
)
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


def classify_auth_error(raw_message: Optional[str], raw_code: Optional[str] = None) -> str:
    """
    Map a remote sign-in error to the message shown to the user.

    - "Invalid login credentials" -> generic invalid email/password message
    - "Email not confirmed" (or its error code) -> confirm-your-email instruction
    - anything else -> passed through verbatim
    """
    message = raw_message or ""

    if INVALID_CREDENTIALS_PHRASE in message:
        return INVALID_CREDENTIALS_MESSAGE

    if EMAIL_NOT_CONFIRMED_PHRASE in message or raw_code == EMAIL_NOT_CONFIRMED_CODE:
        return EMAIL_NOT_CONFIRMED_MESSAGE

    return message or UNKNOWN_ERROR_MESSAGE
