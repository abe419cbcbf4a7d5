"""Domain models for authentication and user profiles."""

from dataclasses import dataclass

USER_ROLES = frozenset({"producer", "distributor", "sales_agent", "admin"})


@dataclass(frozen=True)
class UserProfile:
    """Application profile stored in the users table."""

    id: str
    email: str
    full_name: str
    role: str
    created_at: str | None = None


@dataclass(frozen=True)
class AuthSession:
    """Session issued by the identity service."""

    access_token: str
    refresh_token: str | None = None
    expires_at: int | None = None
    user_id: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a sign-up or sign-in request."""

    user_id: str | None
    email: str | None
    session: AuthSession | None


@dataclass(frozen=True)
class SessionChange:
    """A session change delivered by the identity service."""

    event: str
    session: AuthSession | None
