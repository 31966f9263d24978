"""
TASKNEST Web - Remote Backend Models

Value objects exchanged with the hosted identity & storage service.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Identity:
    """Authenticated account as issued by the remote service."""

    id: str
    email: str


@dataclass(frozen=True)
class Session:
    """Remote session; only its presence matters to the app."""

    identity: Identity
    access_token: Optional[str] = None
    expires_at: Optional[int] = None


@dataclass(frozen=True)
class AuthResult:
    """Outcome of account creation or credential verification."""

    identity: Optional[Identity]
    session_issued: bool


@dataclass(frozen=True)
class SessionChange:
    """Push notification about the remote session (SIGNED_IN, SIGNED_OUT, ...)."""

    event: str
    session: Optional[Session] = None
