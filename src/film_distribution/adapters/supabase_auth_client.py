"""Supabase Auth implementation of the identity client."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from supabase import AsyncClient
from supabase_auth.errors import AuthError

from film_distribution.domain.auth import AuthResult, AuthSession
from film_distribution.domain.results import RemoteError
from film_distribution.services.auth import AuthClient, SessionCallback


@dataclass
class SupabaseAuthClient(AuthClient):
    """Wraps ``client.auth`` and converts its types to domain models."""

    client: AsyncClient

    async def sign_up(
        self, email: str, password: str, metadata: dict[str, object]
    ) -> AuthResult:
        """Create an account with profile metadata attached."""
        try:
            response = await self.client.auth.sign_up(
                {"email": email, "password": password, "options": {"data": metadata}}
            )
        except AuthError as exc:
            raise RemoteError(exc.message) from exc
        return _to_result(response)

    async def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        """Establish a session with email and password."""
        try:
            response = await self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            raise RemoteError(exc.message) from exc
        return _to_result(response)

    async def sign_out(self) -> None:
        """Terminate the current session."""
        try:
            await self.client.auth.sign_out()
        except AuthError as exc:
            raise RemoteError(exc.message) from exc

    async def get_session(self) -> AuthSession | None:
        """Return the stored session, if any."""
        try:
            session = await self.client.auth.get_session()
        except AuthError as exc:
            raise RemoteError(exc.message) from exc
        return to_auth_session(session)

    def on_auth_state_change(self, callback: SessionCallback) -> Callable[[], None]:
        """Forward auth state changes as domain sessions."""

        def forward(event: Any, session: Any) -> None:
            callback(str(event), to_auth_session(session))

        subscription = self.client.auth.on_auth_state_change(forward)
        return subscription.unsubscribe


def to_auth_session(session: Any) -> AuthSession | None:
    """Convert a Supabase session into a domain session."""
    if session is None:
        return None
    user = getattr(session, "user", None)
    return AuthSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=session.expires_at,
        user_id=str(user.id) if user is not None else None,
        email=user.email if user is not None else None,
    )


def _to_result(response: Any) -> AuthResult:
    user = response.user
    return AuthResult(
        user_id=str(user.id) if user is not None else None,
        email=user.email if user is not None else None,
        session=to_auth_session(response.session),
    )
