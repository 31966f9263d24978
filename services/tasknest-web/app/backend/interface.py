"""
TASKNEST Web - Remote Backend Interface

Port to the hosted identity & storage service.
Enables swapping implementations (Supabase for runtime, in-memory for tests).
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Any, AsyncIterator, Optional

from app.backend.models import AuthResult, Session, SessionChange


Row = dict[str, Any]


class RemoteBackendInterface(ABC):
    """
    Abstract interface for the remote identity & storage service.

    Failures are reported as RemoteServiceError.
    Row-level ownership of table data is enforced by the remote side.
    """

    # Auth

    @abstractmethod
    async def create_account(self, email: str, password: str) -> AuthResult:
        pass

    @abstractmethod
    async def verify_credentials(self, email: str, password: str) -> AuthResult:
        pass

    @abstractmethod
    async def get_current_session(self) -> Optional[Session]:
        pass

    @abstractmethod
    def session_changes(self) -> AbstractAsyncContextManager[AsyncIterator[SessionChange]]:
        """
        Subscribe to session-change notifications.

        Usage:
            async with backend.session_changes() as changes:
                async for change in changes:
                    ...

        The subscription is released when the context exits.
        """

    @abstractmethod
    async def end_session(self) -> None:
        pass

    # Tables

    @abstractmethod
    async def select(
        self,
        table: str,
        filters: Optional[Row] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Row]:
        """Select rows matching all equality filters."""

    @abstractmethod
    async def insert(self, table: str, row: Row) -> Row:
        """Insert a row and return it as stored (with generated columns)."""

    @abstractmethod
    async def update(self, table: str, filters: Row, values: Row) -> list[Row]:
        """Update matching rows and return them."""

    @abstractmethod
    async def delete(self, table: str, filters: Row) -> None:
        pass
