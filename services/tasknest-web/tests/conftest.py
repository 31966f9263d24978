"""
TASKNEST Web - Test Configuration

Shared fixtures for CI-safe testing without Supabase.
"""

import asyncio
import uuid
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.auth.dependencies import get_session_controller
from app.auth.session import SessionController
from app.backend.memory import InMemoryBackend, _Account
from app.backend.models import AuthResult, Identity
from app.tasks.router import get_todo_lists


class RecordingBackend(InMemoryBackend):
    """
    In-memory backend that records calls and can fail or hang on demand.

    - `failures[name]` is raised when operation `name` is called
    - operations listed in `hanging` wait for `release` before completing
    """

    def __init__(self, require_email_confirmation: bool = False):
        super().__init__(require_email_confirmation=require_email_confirmation)
        self.calls: list[tuple] = []
        self.failures: dict[str, Exception] = {}
        self.hanging: set[str] = set()
        self.release = asyncio.Event()
        self.settled: list[str] = []

    def register(self, email: str, password: str, confirmed: bool = True) -> Identity:
        """Create an account without starting a session (synchronous helper)."""
        identity = Identity(id=str(uuid.uuid4()), email=email)
        self._accounts[email.lower()] = _Account(identity=identity, password=password, confirmed=confirmed)
        return identity

    def calls_to(self, name: str, table: str | None = None) -> list[tuple]:
        return [
            call for call in self.calls
            if call[0] == name and (table is None or call[1] == table)
        ]

    async def _record(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if name in self.hanging:
            await self.release.wait()
            self.settled.append(name)
        if name in self.failures:
            raise self.failures[name]

    async def create_account(self, email: str, password: str) -> AuthResult:
        await self._record("create_account", email)
        return await super().create_account(email, password)

    async def verify_credentials(self, email: str, password: str) -> AuthResult:
        await self._record("verify_credentials", email)
        return await super().verify_credentials(email, password)

    async def get_current_session(self):
        await self._record("get_current_session")
        return await super().get_current_session()

    async def end_session(self) -> None:
        await self._record("end_session")
        await super().end_session()

    async def select(self, table, filters=None, order_by=None, limit=None):
        await self._record("select", table, filters)
        return await super().select(table, filters, order_by, limit)

    async def insert(self, table, row):
        await self._record("insert", table, row)
        return await super().insert(table, row)

    async def update(self, table, filters, values):
        await self._record("update", table, filters, values)
        return await super().update(table, filters, values)

    async def delete(self, table, filters):
        await self._record("delete", table, filters)
        await super().delete(table, filters)


class NavigationLog:
    """Records screens the controller asked to show."""

    def __init__(self):
        self.locations: list[str] = []

    def __call__(self, location: str) -> None:
        self.locations.append(location)

    @property
    def last(self) -> Optional[str]:
        return self.locations[-1] if self.locations else None


@pytest.fixture
def backend() -> RecordingBackend:
    """Provide a fresh in-memory backend for each test."""
    return RecordingBackend()


@pytest.fixture
def navigation() -> NavigationLog:
    return NavigationLog()


@pytest.fixture
def controller(backend, navigation) -> SessionController:
    """Session controller wired to the in-memory backend (watcher not started)."""
    return SessionController(backend, timeout_seconds=1.0, navigate=navigation)


@pytest.fixture
def registered_user(backend) -> dict:
    """Register a confirmed account and return its credentials."""
    credentials = {"email": "user@example.com", "password": "longenough1"}
    identity = backend.register(credentials["email"], credentials["password"])
    return {**credentials, "id": identity.id}


@pytest.fixture
def client(controller):
    """Create test client with the in-memory backend."""
    todo_lists: dict = {}
    app.dependency_overrides[get_session_controller] = lambda: controller
    app.dependency_overrides[get_todo_lists] = lambda: todo_lists

    yield TestClient(app)
    # Clean up override after test
    app.dependency_overrides.clear()


@pytest.fixture
def signed_in_client(client, registered_user):
    """Test client whose controller is signed in as the registered user."""
    response = client.post(
        "/auth/login",
        json={"email": registered_user["email"], "password": registered_user["password"]},
    )
    assert response.json()["is_authenticated"] is True
    return client
