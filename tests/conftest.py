"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from film_distribution.config import Settings
from film_distribution.containers import AppContainer
from film_distribution.domain.auth import AuthResult, AuthSession, UserProfile
from film_distribution.domain.films import Distribution, Film
from film_distribution.domain.results import RemoteError
from film_distribution.services.auth import (
    AuthClient,
    AuthService,
    ProfileRepository,
    SessionCallback,
)
from film_distribution.services.films import (
    DistributionRepository,
    FilmRepository,
    FilmStore,
)


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()


def make_film(**overrides: object) -> Film:
    values: dict[str, object] = {
        "id": str(uuid4()),
        "title": "Night Train",
        "director": "A. Director",
        "genre": "drama",
        "release_year": 2024,
        "duration_minutes": 104,
        "description": "",
        "status": "draft",
        "budget": 1_000_000.0,
        "revenue": 0.0,
        "user_id": "user-1",
        "created_at": _now(),
        "updated_at": _now(),
    }
    values.update(overrides)
    return Film(**values)  # type: ignore[arg-type]


def make_distribution(**overrides: object) -> Distribution:
    values: dict[str, object] = {
        "id": str(uuid4()),
        "film_id": "f1",
        "distributor_name": "Acme",
        "territory": "US",
        "distribution_type": "theatrical",
        "start_date": "2025-01-01",
        "end_date": "2025-12-31",
        "revenue_share": 0.3,
        "guaranteed_minimum": 50_000.0,
        "status": "negotiating",
        "created_at": _now(),
        "updated_at": _now(),
    }
    values.update(overrides)
    return Distribution(**values)  # type: ignore[arg-type]


@dataclass
class InMemoryFilmRepository(FilmRepository):
    """In-memory films table, newest first."""

    rows: list[Film] = field(default_factory=list)
    failure: Exception | None = None
    payloads: list[dict[str, object]] = field(default_factory=list)

    def _raise_if_failing(self) -> None:
        if self.failure is not None:
            raise self.failure

    async def list_films(self) -> list[Film]:
        self._raise_if_failing()
        return list(self.rows)

    async def create_film(self, payload: dict[str, object]) -> Film:
        self._raise_if_failing()
        self.payloads.append(payload)
        film = make_film(**payload)
        self.rows.insert(0, film)
        return film

    async def update_film(self, film_id: str, payload: dict[str, object]) -> Film:
        self._raise_if_failing()
        for index, film in enumerate(self.rows):
            if film.id == film_id:
                updated = replace(film, **payload, updated_at=_now())
                self.rows[index] = updated
                return updated
        raise RemoteError(f"Film not found: {film_id}")

    async def delete_film(self, film_id: str) -> None:
        self._raise_if_failing()
        self.rows = [film for film in self.rows if film.id != film_id]


@dataclass
class InMemoryDistributionRepository(DistributionRepository):
    """In-memory distributions table, newest first."""

    rows: list[Distribution] = field(default_factory=list)
    failure: Exception | None = None

    def _raise_if_failing(self) -> None:
        if self.failure is not None:
            raise self.failure

    async def list_distributions(self) -> list[Distribution]:
        self._raise_if_failing()
        return list(self.rows)

    async def create_distribution(self, payload: dict[str, object]) -> Distribution:
        self._raise_if_failing()
        distribution = make_distribution(**payload)
        self.rows.insert(0, distribution)
        return distribution

    async def update_distribution(
        self, distribution_id: str, payload: dict[str, object]
    ) -> Distribution:
        self._raise_if_failing()
        for index, distribution in enumerate(self.rows):
            if distribution.id == distribution_id:
                updated = replace(distribution, **payload, updated_at=_now())
                self.rows[index] = updated
                return updated
        raise RemoteError(f"Distribution not found: {distribution_id}")

    async def delete_distribution(self, distribution_id: str) -> None:
        self._raise_if_failing()
        self.rows = [dist for dist in self.rows if dist.id != distribution_id]


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory users table that records lookups."""

    profiles: dict[str, UserProfile] = field(default_factory=dict)
    lookups: list[str] = field(default_factory=list)

    async def get_profile(self, user_id: str) -> UserProfile | None:
        self.lookups.append(user_id)
        return self.profiles.get(user_id)


@dataclass
class FakeAuthClient(AuthClient):
    """Fake identity service that emits changes like Supabase Auth."""

    session: AuthSession | None = None
    sign_up_error: Exception | None = None
    sign_in_error: Exception | None = None
    sign_out_error: Exception | None = None
    get_session_error: Exception | None = None
    callbacks: list[SessionCallback] = field(default_factory=list)
    sign_ups: list[tuple[str, dict[str, object]]] = field(default_factory=list)

    async def sign_up(
        self, email: str, password: str, metadata: dict[str, object]
    ) -> AuthResult:
        if self.sign_up_error is not None:
            raise self.sign_up_error
        self.sign_ups.append((email, metadata))
        return AuthResult(user_id=str(uuid4()), email=email, session=None)

    async def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        if self.sign_in_error is not None:
            raise self.sign_in_error
        session = AuthSession(access_token="token", user_id="user-1", email=email)
        self.session = session
        self.emit("SIGNED_IN", session)
        return AuthResult(user_id="user-1", email=email, session=session)

    async def sign_out(self) -> None:
        if self.sign_out_error is not None:
            raise self.sign_out_error
        self.session = None
        self.emit("SIGNED_OUT", None)

    async def get_session(self) -> AuthSession | None:
        if self.get_session_error is not None:
            raise self.get_session_error
        return self.session

    def on_auth_state_change(self, callback: SessionCallback) -> Callable[[], None]:
        self.callbacks.append(callback)

        def unsubscribe() -> None:
            self.callbacks.remove(callback)

        return unsubscribe

    def emit(self, event: str, session: AuthSession | None) -> None:
        for callback in list(self.callbacks):
            callback(event, session)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoiYW5vbiJ9."
            "c2lnbmF0dXJl"
        ),
    )


@pytest.fixture
def film_repository() -> InMemoryFilmRepository:
    return InMemoryFilmRepository()


@pytest.fixture
def distribution_repository() -> InMemoryDistributionRepository:
    return InMemoryDistributionRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository(
        profiles={
            "user-1": UserProfile(
                id="user-1",
                email="producer@example.com",
                full_name="Pat Producer",
                role="producer",
            )
        }
    )


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture
def container(
    settings: Settings,
    auth_client: FakeAuthClient,
    profile_repository: InMemoryProfileRepository,
    film_repository: InMemoryFilmRepository,
    distribution_repository: InMemoryDistributionRepository,
) -> AppContainer:
    auth_service = AuthService(auth_client, profile_repository)

    async def close_resources() -> None:
        await auth_service.close()

    return AppContainer(
        settings=settings,
        auth_service=auth_service,
        film_store=FilmStore(film_repository, distribution_repository),
        close_resources=close_resources,
    )
