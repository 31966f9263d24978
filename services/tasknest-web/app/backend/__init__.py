"""
TASKNEST Web - Remote Backend

Port and adapters for the hosted identity & storage service.
"""

from app.backend.errors import RemoteServiceError
from app.backend.interface import RemoteBackendInterface
from app.backend.memory import InMemoryBackend
from app.backend.models import AuthResult, Identity, Session, SessionChange

__all__ = [
    "AuthResult",
    "Identity",
    "InMemoryBackend",
    "RemoteBackendInterface",
    "RemoteServiceError",
    "Session",
    "SessionChange",
]
