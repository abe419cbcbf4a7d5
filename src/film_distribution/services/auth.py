"""Session management against the identity service."""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from film_distribution.domain.auth import (
    USER_ROLES,
    AuthResult,
    AuthSession,
    SessionChange,
    UserProfile,
)
from film_distribution.domain.results import OperationResult, RemoteError

_logger = logging.getLogger(__name__)

SessionCallback = Callable[[str, AuthSession | None], None]


class AuthClient(Protocol):
    """Remote interface for the identity service."""

    async def sign_up(
        self, email: str, password: str, metadata: dict[str, object]
    ) -> AuthResult:
        """Create an account with profile metadata attached."""

    async def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        """Establish a session with email and password."""

    async def sign_out(self) -> None:
        """Terminate the current session."""

    async def get_session(self) -> AuthSession | None:
        """Return the current session snapshot, if any."""

    def on_auth_state_change(self, callback: SessionCallback) -> Callable[[], None]:
        """Register a session-change callback and return an unsubscribe handle."""


class ProfileRepository(Protocol):
    """Remote interface for the users profile table."""

    async def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the profile for a user id, if present."""


@dataclass
class AuthService:
    """Owns the current session and profile.

    ``user`` and ``session`` only change through the session-change stream
    (or a successful sign-out). Sign-in returning does not mean the state has
    been updated yet; listeners from :meth:`changes` are notified once each
    change has been applied.
    """

    auth_client: AuthClient
    profile_repository: ProfileRepository
    user: UserProfile | None = None
    session: AuthSession | None = None
    loading: bool = False
    _events: asyncio.Queue[SessionChange] = field(
        default_factory=asyncio.Queue, init=False, repr=False
    )
    _listeners: list[asyncio.Queue[SessionChange]] = field(
        default_factory=list, init=False, repr=False
    )
    _worker: asyncio.Task[None] | None = field(default=None, init=False, repr=False)
    _unsubscribe: Callable[[], None] | None = field(
        default=None, init=False, repr=False
    )

    @property
    def is_authenticated(self) -> bool:
        """Return True when a session is present."""
        return self.session is not None

    async def sign_up(
        self, email: str, password: str, full_name: str, role: str
    ) -> OperationResult[AuthResult]:
        """Request account creation with the profile metadata attached."""
        if role not in USER_ROLES:
            return OperationResult(error=ValueError(f"Unsupported role: {role}"))
        self.loading = True
        try:
            result = await self.auth_client.sign_up(
                email, password, {"full_name": full_name, "role": role}
            )
        except Exception as exc:
            _logger.warning("Sign-up failed: email=%s error=%s", email, exc)
            return OperationResult(error=exc)
        finally:
            self.loading = False
        return OperationResult(data=result)

    async def sign_in(self, email: str, password: str) -> OperationResult[AuthResult]:
        """Request a password session; state follows via the change stream."""
        self.loading = True
        try:
            result = await self.auth_client.sign_in_with_password(email, password)
        except Exception as exc:
            _logger.warning("Sign-in failed: email=%s error=%s", email, exc)
            return OperationResult(error=exc)
        finally:
            self.loading = False
        return OperationResult(data=result)

    async def sign_out(self) -> None:
        """Terminate the session and clear local state on success."""
        self.loading = True
        try:
            await self.auth_client.sign_out()
            self.user = None
            self.session = None
        except Exception:
            _logger.exception("Error signing out")
        finally:
            self.loading = False

    async def initialize(self) -> None:
        """Load the current session and start consuming session changes."""
        if self._worker is not None:
            return
        try:
            self.session = await self.auth_client.get_session()
        except Exception:
            _logger.exception("Failed to read current session")
        self._worker = asyncio.create_task(self._process_events())
        self._unsubscribe = self.auth_client.on_auth_state_change(self._enqueue)

    def changes(self) -> asyncio.Queue[SessionChange]:
        """Return a queue that receives each session change once applied."""
        listener: asyncio.Queue[SessionChange] = asyncio.Queue()
        self._listeners.append(listener)
        return listener

    async def close(self) -> None:
        """Stop listening for session changes."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._worker is not None:
            self._worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._worker
            self._worker = None

    def _enqueue(self, event: str, session: AuthSession | None) -> None:
        self._events.put_nowait(SessionChange(event=event, session=session))

    async def _process_events(self) -> None:
        while True:
            change = await self._events.get()
            try:
                await self._apply_change(change)
            except Exception:
                _logger.exception("Failed to apply session change: %s", change.event)
            finally:
                self._events.task_done()

    async def _apply_change(self, change: SessionChange) -> None:
        self.session = change.session
        if change.session is not None and change.session.user_id:
            profile = await self._load_profile(change.session.user_id)
            # A sign-out may have landed while the profile was loading.
            if self.session is change.session:
                self.user = profile
        else:
            self.user = None
        _logger.info(
            "Session change applied: event=%s authenticated=%s",
            change.event,
            self.is_authenticated,
        )
        for listener in self._listeners:
            listener.put_nowait(change)

    async def _load_profile(self, user_id: str) -> UserProfile | None:
        try:
            return await self.profile_repository.get_profile(user_id)
        except RemoteError as exc:
            _logger.warning("Failed to load profile: user_id=%s %s", user_id, exc)
        except Exception:
            _logger.exception("Failed to load profile: user_id=%s", user_id)
        return None
