"""
TASKNEST Web - In-Memory Backend

In-memory implementation of the remote service for CI-safe testing and
for running locally without Supabase credentials.
"""

import asyncio
import logging
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from app.backend.errors import RemoteServiceError
from app.backend.interface import RemoteBackendInterface, Row
from app.backend.models import AuthResult, Identity, Session, SessionChange

logger = logging.getLogger(__name__)


@dataclass
class _Account:
    identity: Identity
    password: str
    confirmed: bool


class InMemoryBackend(RemoteBackendInterface):
    """
    In-memory identity & storage service.

    Mirrors the remote behavior the app relies on: duplicate accounts are
    rejected, unconfirmed accounts cannot sign in, sign-in/sign-out push a
    session change to every subscriber, and primary keys are unique.
    """

    def __init__(self, require_email_confirmation: bool = False):
        self.require_email_confirmation = require_email_confirmation
        self._accounts: dict[str, _Account] = {}
        self._session: Optional[Session] = None
        self._subscribers: list[asyncio.Queue] = []
        self._tables: dict[str, dict[str, Row]] = {}

    def confirm_email(self, email: str) -> None:
        account = self._accounts.get(email.lower())
        if account is not None:
            account.confirmed = True

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def rows(self, table: str) -> list[Row]:
        """Synchronous helper for tests that need direct access."""
        return [dict(row) for row in self._tables.get(table, {}).values()]

    # Auth

    async def create_account(self, email: str, password: str) -> AuthResult:
        key = email.lower()
        if key in self._accounts:
            raise RemoteServiceError("User already registered", "user_already_exists")

        identity = Identity(id=str(uuid.uuid4()), email=email)
        confirmed = not self.require_email_confirmation
        self._accounts[key] = _Account(identity=identity, password=password, confirmed=confirmed)
        logger.info(f"[InMemoryBackend] Account created: email={email}, id={identity.id}")

        if not confirmed:
            return AuthResult(identity=identity, session_issued=False)

        self._start_session(identity)
        return AuthResult(identity=identity, session_issued=True)

    async def verify_credentials(self, email: str, password: str) -> AuthResult:
        account = self._accounts.get(email.lower())
        if account is None or account.password != password:
            raise RemoteServiceError("Invalid login credentials", "invalid_credentials")
        if not account.confirmed:
            raise RemoteServiceError("Email not confirmed", "email_not_confirmed")

        self._start_session(account.identity)
        return AuthResult(identity=account.identity, session_issued=True)

    async def get_current_session(self) -> Optional[Session]:
        return self._session

    @asynccontextmanager
    async def session_changes(self) -> AsyncIterator[AsyncIterator[SessionChange]]:
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers.append(queue)
        try:
            yield self._drain(queue)
        finally:
            self._subscribers.remove(queue)

    async def end_session(self) -> None:
        self._session = None
        self._emit(SessionChange(event="SIGNED_OUT", session=None))

    def _start_session(self, identity: Identity) -> None:
        self._session = Session(identity=identity, access_token=uuid.uuid4().hex)
        self._emit(SessionChange(event="SIGNED_IN", session=self._session))

    def _emit(self, change: SessionChange) -> None:
        for queue in self._subscribers:
            queue.put_nowait(change)

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
        results = [dict(row) for row in self._tables.get(table, {}).values() if _matches(row, filters)]
        if order_by is not None:
            results.sort(key=lambda row: row.get(order_by) or "")
        if limit is not None:
            results = results[:limit]
        return results

    async def insert(self, table: str, row: Row) -> Row:
        rows = self._tables.setdefault(table, {})
        stored = dict(row)
        stored.setdefault("id", str(uuid.uuid4()))
        stored.setdefault("created_at", datetime.now(timezone.utc).isoformat())

        row_id = str(stored["id"])
        if row_id in rows:
            raise RemoteServiceError(
                f'duplicate key value violates unique constraint "{table}_pkey"',
                "23505",
            )
        rows[row_id] = stored
        return dict(stored)

    async def update(self, table: str, filters: Row, values: Row) -> list[Row]:
        updated: list[Row] = []
        for row in self._tables.get(table, {}).values():
            if _matches(row, filters):
                row.update(values)
                updated.append(dict(row))
        return updated

    async def delete(self, table: str, filters: Row) -> None:
        rows = self._tables.get(table, {})
        for row_id in [row_id for row_id, row in rows.items() if _matches(row, filters)]:
            del rows[row_id]


def _matches(row: Row, filters: Optional[Row]) -> bool:
    if not filters:
        return True
    return all(row.get(key) == value for key, value in filters.items())
