"""
TASKNEST Web - Session Controller

Single authority for "who is signed in".

The controller owns the current-user state, mediates sign-up, sign-in and
sign-out against the remote service, bounds every auth call with a deadline,
and keeps the state in sync with the remote's session-change notifications.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from app.config import settings
from app.auth.errors import (
    CONFIRMATION_REQUIRED_MESSAGE,
    TIMEOUT_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
    classify_auth_error,
)
from app.auth.models import Profile
from app.auth.repository import ProfileRepository
from app.backend.errors import RemoteServiceError
from app.backend.interface import RemoteBackendInterface
from app.backend.models import Identity, SessionChange

logger = logging.getLogger(__name__)

T = TypeVar("T")

ENTRY_LOCATION = "/"
TODOS_LOCATION = "/todos"


class DeadlineExceeded(Exception):
    """Raised when a remote call does not settle before its deadline."""


async def call_with_deadline(awaitable: Awaitable[T], timeout: float) -> T:
    """
    Await a remote call for at most `timeout` seconds.

    Whichever settles first wins. On expiry the call is cancelled, so its
    eventual outcome is discarded.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as e:
        raise DeadlineExceeded(f"No response within {timeout:g}s") from e


@dataclass(frozen=True)
class AuthSnapshot:
    """Read-only view of the current-user state."""

    identity: Optional[Identity]
    is_loading: bool
    error: Optional[str]

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None


SnapshotListener = Callable[[AuthSnapshot], None]


class SessionController:
    """Owns current-user state and the session lifecycle calls."""

    def __init__(
        self,
        backend: RemoteBackendInterface,
        profiles: Optional[ProfileRepository] = None,
        timeout_seconds: Optional[float] = None,
        navigate: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize the session controller.

        Args:
            backend: Remote identity & storage service
            profiles: Profile repository (defaults to one over `backend`)
            timeout_seconds: Deadline for sign-up and sign-in calls
            navigate: Optional callback invoked with the screen to show next
        """
        self.backend = backend
        self.profiles = profiles or ProfileRepository(backend)
        if timeout_seconds is None:
            timeout_seconds = settings.AUTH_TIMEOUT_SECONDS
        self.timeout_seconds = timeout_seconds
        self._navigate = navigate

        self.identity: Optional[Identity] = None
        self.is_loading = False
        self.error: Optional[str] = None
        self.location = ENTRY_LOCATION

        self._listeners: list[SnapshotListener] = []
        self._watcher: asyncio.Task | None = None
        self._ready: asyncio.Event | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    def snapshot(self) -> AuthSnapshot:
        return AuthSnapshot(
            identity=self.identity,
            is_loading=self.is_loading,
            error=self.error,
        )

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener for state changes. Returns the unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Lifecycle

    async def start(self) -> None:
        """Start restoring the session and following remote session changes."""
        if self._watcher is not None:
            logger.info("Session watcher already running")
            return

        self._ready = asyncio.Event()
        self._watcher = asyncio.create_task(self._watch_sessions())
        logger.info("Session watcher started")

    async def wait_until_ready(self) -> None:
        """Wait until the initial session restore has been attempted."""
        if self._ready is not None:
            await self._ready.wait()

    async def stop(self) -> None:
        """Stop following session changes and release the subscription."""
        if self._watcher is None:
            return

        self._watcher.cancel()
        try:
            await self._watcher
        except asyncio.CancelledError:
            pass
        self._watcher = None
        logger.info("Session watcher stopped")

    async def __aenter__(self) -> "SessionController":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    # Operations

    async def sign_up(self, email: str, password: str) -> None:
        """Create an account; failures are published as `error`."""
        self._begin()
        try:
            result = await call_with_deadline(
                self.backend.create_account(email, password),
                self.timeout_seconds,
            )
            if result.session_issued and result.identity is not None:
                await self._authenticate(result.identity)
                self._go(TODOS_LOCATION)
            else:
                logger.info(f"Sign up for {email} requires email confirmation")
                self.error = CONFIRMATION_REQUIRED_MESSAGE
        except DeadlineExceeded:
            logger.warning(f"Sign up timed out after {self.timeout_seconds:g}s")
            self.error = TIMEOUT_MESSAGE
        except RemoteServiceError as e:
            logger.error(f"Sign up failed for {email}: {e.message}")
            self.error = e.message or UNKNOWN_ERROR_MESSAGE
        finally:
            self._finish()

    async def login(self, email: str, password: str, remember_me: bool = False) -> None:
        """
        Sign in with email and password; failures are published as `error`.

        `remember_me` is accepted for form compatibility only. Session
        persistence is left to the remote service.
        """
        self._begin()
        try:
            result = await call_with_deadline(
                self.backend.verify_credentials(email, password),
                self.timeout_seconds,
            )
            if result.identity is None:
                self.error = UNKNOWN_ERROR_MESSAGE
            else:
                await self._authenticate(result.identity)
                self._go(TODOS_LOCATION)
        except DeadlineExceeded:
            logger.warning(f"Sign in timed out after {self.timeout_seconds:g}s")
            self.error = TIMEOUT_MESSAGE
        except RemoteServiceError as e:
            logger.error(f"Sign in failed for {email}: {e.message}")
            self.error = classify_auth_error(e.message, e.code)
        finally:
            self._finish()

    async def logout(self) -> None:
        """Sign out. Local state is always cleared, even if the remote call fails."""
        try:
            await self.backend.end_session()
        except Exception:
            logger.exception("Remote sign out failed; clearing local session anyway")

        self.identity = None
        self.error = None
        self._notify()
        self._go(ENTRY_LOCATION)

    async def ensure_profile_exists(self, identity_id: str, email: str) -> None:
        """Create the identity's profile row if missing. Best-effort: never raises."""
        try:
            if await self.profiles.get_by_id(identity_id) is None:
                await self.profiles.create(Profile(id=identity_id, email=email))
                logger.info(f"Profile created for {identity_id}")
        except Exception as e:
            logger.error(f"Failed to ensure profile for {identity_id}: {e}")

    # Internals

    def _begin(self) -> None:
        self.is_loading = True
        self.error = None
        self._notify()

    def _finish(self) -> None:
        self.is_loading = False
        self._notify()

    async def _authenticate(self, identity: Identity) -> None:
        await self.ensure_profile_exists(identity.id, identity.email)
        self.identity = identity
        self._notify()

    def _go(self, location: str) -> None:
        self.location = location
        if self._navigate is not None:
            self._navigate(location)

    def _follow(self, location: str) -> None:
        # Pushed changes only navigate when the screen no longer matches
        if self.location != location:
            self._go(location)

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Session listener failed")

    async def _watch_sessions(self) -> None:
        """Restore the current session, then follow remote session changes."""
        try:
            async with self.backend.session_changes() as changes:
                await self._restore_session()
                self._ready.set()
                async for change in changes:
                    await self._handle_session_change(change)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Session watcher failed")
        finally:
            self._ready.set()

    async def _restore_session(self) -> None:
        try:
            session = await self.backend.get_current_session()
        except RemoteServiceError as e:
            logger.error(f"Session restore failed: {e.message}")
            return

        if session is not None:
            logger.info(f"Restored session for {session.identity.id}")
            await self._authenticate(session.identity)
            self._follow(TODOS_LOCATION)

    async def _handle_session_change(self, change: SessionChange) -> None:
        logger.debug(f"Session change: {change.event}")
        try:
            if change.session is not None:
                await self._authenticate(change.session.identity)
                self._follow(TODOS_LOCATION)
            else:
                self.identity = None
                self._notify()
                self._follow(ENTRY_LOCATION)
        except Exception:
            logger.exception(f"Error handling session change {change.event}")
