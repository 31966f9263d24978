"""
TASKNEST Web - Supabase Backend

Supabase implementation of the remote service: GoTrue for accounts and
sessions, PostgREST for the profiles and todos tables.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from supabase import AsyncClient, acreate_client

from app.backend.errors import RemoteServiceError
from app.backend.interface import RemoteBackendInterface, Row
from app.backend.models import AuthResult, Identity, Session, SessionChange

logger = logging.getLogger(__name__)


def _identity(user: Any) -> Optional[Identity]:
    if user is None:
        return None
    return Identity(id=str(user.id), email=user.email or "")


def _session(session: Any) -> Optional[Session]:
    if session is None or getattr(session, "user", None) is None:
        return None
    return Session(
        identity=_identity(session.user),
        access_token=session.access_token,
        expires_at=session.expires_at,
    )


class SupabaseBackend(RemoteBackendInterface):
    """Supabase client wrapper for authentication and table access."""

    def __init__(self, client: AsyncClient):
        self.client = client

    @classmethod
    async def connect(cls, url: str, key: str) -> "SupabaseBackend":
        """Create the async Supabase client."""
        client = await acreate_client(url, key)
        logger.info("Supabase client initialized successfully")
        return cls(client)

    # Auth

    async def create_account(self, email: str, password: str) -> AuthResult:
        try:
            response = await self.client.auth.sign_up({"email": email, "password": password})
        except Exception as e:
            logger.error(f"Supabase sign up error: {e}")
            raise RemoteServiceError.from_exception(e) from e

        return AuthResult(
            identity=_identity(response.user),
            session_issued=response.session is not None,
        )

    async def verify_credentials(self, email: str, password: str) -> AuthResult:
        try:
            response = await self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            logger.error(f"Supabase sign in error: {e}")
            raise RemoteServiceError.from_exception(e) from e

        return AuthResult(
            identity=_identity(response.user),
            session_issued=response.session is not None,
        )

    async def get_current_session(self) -> Optional[Session]:
        try:
            session = await self.client.auth.get_session()
        except Exception as e:
            raise RemoteServiceError.from_exception(e) from e
        return _session(session)

    @asynccontextmanager
    async def session_changes(self) -> AsyncIterator[AsyncIterator[SessionChange]]:
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue = asyncio.Queue()

        # The auth client invokes callbacks synchronously, possibly off-loop
        def on_change(event: Any, session: Any) -> None:
            change = SessionChange(event=str(event), session=_session(session))
            loop.call_soon_threadsafe(queue.put_nowait, change)

        subscription = self.client.auth.on_auth_state_change(on_change)
        try:
            yield self._drain(queue)
        finally:
            subscription.unsubscribe()
            logger.debug("Auth state subscription released")

    async def end_session(self) -> None:
        try:
            await self.client.auth.sign_out()
        except Exception as e:
            raise RemoteServiceError.from_exception(e) from e

    @staticmethod
    async def _drain(queue: asyncio.Queue) -> AsyncIterator[SessionChange]:
        while True:
            yield await queue.get()

    # Tables

    async def select(
        self,
        table: str,
        filters: Optional[Row] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Row]:
        query = self.client.table(table).select("*")
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        if order_by is not None:
            query = query.order(order_by)
        if limit is not None:
            query = query.limit(limit)
        response = await self._execute(query)
        return list(response.data or [])

    async def insert(self, table: str, row: Row) -> Row:
        response = await self._execute(self.client.table(table).insert(row))
        data = response.data or []
        return data[0] if data else dict(row)

    async def update(self, table: str, filters: Row, values: Row) -> list[Row]:
        query = self.client.table(table).update(values)
        for column, value in filters.items():
            query = query.eq(column, value)
        response = await self._execute(query)
        return list(response.data or [])

    async def delete(self, table: str, filters: Row) -> None:
        query = self.client.table(table).delete()
        for column, value in filters.items():
            query = query.eq(column, value)
        await self._execute(query)

    @staticmethod
    async def _execute(query: Any) -> Any:
        try:
            return await query.execute()
        except Exception as e:
            raise RemoteServiceError.from_exception(e) from e
