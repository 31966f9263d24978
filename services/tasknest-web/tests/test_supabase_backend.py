"""
TASKNEST Web - Supabase Backend Tests

CI-safe: the Supabase client is replaced by mocks.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.backend.errors import RemoteServiceError
from app.backend.models import Identity
from app.backend.supabase_backend import SupabaseBackend


class FakeAuthApiError(Exception):
    """Shape of the auth client's API errors: message + code."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


def make_user(user_id: str = "u1", email: str = "a@b.com") -> SimpleNamespace:
    return SimpleNamespace(id=user_id, email=email)


def make_session(user=None) -> SimpleNamespace:
    return SimpleNamespace(user=user or make_user(), access_token="token", expires_at=1700000000)


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def backend(client) -> SupabaseBackend:
    return SupabaseBackend(client)


def query_builder(client: MagicMock, method: str, data: list) -> MagicMock:
    """Wire client.table(...).<method>(...) to a chainable builder returning `data`."""
    builder = MagicMock()
    builder.eq.return_value = builder
    builder.order.return_value = builder
    builder.limit.return_value = builder
    builder.execute = AsyncMock(return_value=SimpleNamespace(data=data))
    getattr(client.table.return_value, method).return_value = builder
    return builder


class TestAuth:
    async def test_sign_up_with_session(self, backend, client):
        client.auth.sign_up = AsyncMock(
            return_value=SimpleNamespace(user=make_user(), session=make_session())
        )

        result = await backend.create_account("a@b.com", "longenough1")

        assert result.identity == Identity(id="u1", email="a@b.com")
        assert result.session_issued is True
        client.auth.sign_up.assert_awaited_once_with({"email": "a@b.com", "password": "longenough1"})

    async def test_sign_up_without_session(self, backend, client):
        client.auth.sign_up = AsyncMock(return_value=SimpleNamespace(user=make_user(), session=None))

        result = await backend.create_account("a@b.com", "longenough1")

        assert result.session_issued is False

    async def test_sign_in_error_keeps_message_and_code(self, backend, client):
        client.auth.sign_in_with_password = AsyncMock(
            side_effect=FakeAuthApiError("Email not confirmed", "email_not_confirmed")
        )

        with pytest.raises(RemoteServiceError) as exc_info:
            await backend.verify_credentials("a@b.com", "longenough1")

        assert exc_info.value.message == "Email not confirmed"
        assert exc_info.value.code == "email_not_confirmed"

    async def test_plain_exception_becomes_remote_error(self, backend, client):
        client.auth.sign_out = AsyncMock(side_effect=ConnectionError("Failed to fetch"))

        with pytest.raises(RemoteServiceError) as exc_info:
            await backend.end_session()

        assert exc_info.value.message == "Failed to fetch"
        assert exc_info.value.code is None

    async def test_current_session(self, backend, client):
        client.auth.get_session = AsyncMock(return_value=make_session())

        session = await backend.get_current_session()

        assert session.identity == Identity(id="u1", email="a@b.com")
        assert session.access_token == "token"

    async def test_no_current_session(self, backend, client):
        client.auth.get_session = AsyncMock(return_value=None)

        assert await backend.get_current_session() is None


class TestSessionChanges:
    async def test_callbacks_are_delivered_and_subscription_released(self, backend, client):
        callbacks = []
        subscription = MagicMock()

        def on_auth_state_change(callback):
            callbacks.append(callback)
            return subscription

        client.auth.on_auth_state_change = MagicMock(side_effect=on_auth_state_change)

        async with backend.session_changes() as changes:
            callbacks[0]("SIGNED_IN", make_session())
            callbacks[0]("SIGNED_OUT", None)

            signed_in = await anext(changes)
            signed_out = await anext(changes)

        assert signed_in.event == "SIGNED_IN"
        assert signed_in.session.identity.id == "u1"
        assert signed_out.event == "SIGNED_OUT"
        assert signed_out.session is None
        subscription.unsubscribe.assert_called_once()


class TestTables:
    async def test_select_applies_filters_and_order(self, backend, client):
        builder = query_builder(client, "select", [{"id": "t1", "text": "x"}])

        rows = await backend.select("todos", filters={"user_id": "u1"}, order_by="created_at")

        assert rows == [{"id": "t1", "text": "x"}]
        client.table.assert_called_with("todos")
        builder.eq.assert_called_once_with("user_id", "u1")
        builder.order.assert_called_once_with("created_at")
        builder.limit.assert_not_called()

    async def test_insert_returns_stored_row(self, backend, client):
        query_builder(client, "insert", [{"id": "p1", "email": "a@b.com", "created_at": "now"}])

        row = await backend.insert("profiles", {"id": "p1", "email": "a@b.com"})

        assert row["created_at"] == "now"

    async def test_update_filters_by_id(self, backend, client):
        builder = query_builder(client, "update", [{"id": "t1", "completed": True}])

        rows = await backend.update("todos", {"id": "t1"}, {"completed": True})

        client.table.return_value.update.assert_called_once_with({"completed": True})
        builder.eq.assert_called_once_with("id", "t1")
        assert rows == [{"id": "t1", "completed": True}]

    async def test_table_error_becomes_remote_error(self, backend, client):
        builder = query_builder(client, "delete", [])
        builder.execute = AsyncMock(
            side_effect=FakeAuthApiError('duplicate key value violates unique constraint "profiles_pkey"', "23505")
        )

        with pytest.raises(RemoteServiceError) as exc_info:
            await backend.delete("todos", {"id": "t1"})

        assert exc_info.value.code == "23505"
