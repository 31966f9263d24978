from typing import Optional


class RemoteServiceError(Exception):
    """Error reported by the remote identity & storage service."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    @classmethod
    def from_exception(cls, exc: Exception) -> "RemoteServiceError":
        """Translate a client library exception, keeping its message and code."""
        message = getattr(exc, "message", None) or str(exc)
        code = getattr(exc, "code", None)
        return cls(str(message), str(code) if code is not None else None)
