"""
TASKNEST Web - Authentication Schemas

Pydantic models for authentication requests and responses.
"""

from typing import Optional

from pydantic import BaseModel, Field

from app.auth.session import AuthSnapshot
from app.auth.validation import validate_credentials
from app.backend.models import Identity


class CredentialsRequest(BaseModel):
    """
    Login / sign-up form payload.

    Missing fields default to empty strings so that `form_errors()` can
    report them with the form's own messages.
    """

    email: str = Field("", max_length=254, description="name@domain.tld")
    password: str = Field("", max_length=128, description="At least PASSWORD_MIN_LENGTH characters")
    remember_me: bool = False

    def form_errors(self) -> dict[str, str]:
        """Field name -> message for every rule the input breaks."""
        return validate_credentials(self.email, self.password)


class IdentityResponse(BaseModel):
    """Public identity information."""

    id: str
    email: str
    name: str = Field(description="Display name: the part of the email before '@'")

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentityResponse":
        return cls(id=identity.id, email=identity.email, name=identity.email.split("@")[0])


class SessionResponse(BaseModel):
    """Current-user state as seen by the browser."""

    identity: Optional[IdentityResponse] = None
    is_authenticated: bool
    is_loading: bool
    error: Optional[str] = None
    location: str = Field(description="Screen to show next")

    @classmethod
    def from_snapshot(cls, snapshot: AuthSnapshot, location: str) -> "SessionResponse":
        identity = None
        if snapshot.identity is not None:
            identity = IdentityResponse.from_identity(snapshot.identity)
        return cls(
            identity=identity,
            is_authenticated=snapshot.is_authenticated,
            is_loading=snapshot.is_loading,
            error=snapshot.error,
            location=location,
        )
