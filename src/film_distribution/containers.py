"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import acreate_client

from film_distribution.adapters.supabase_auth_client import SupabaseAuthClient
from film_distribution.adapters.supabase_distribution_repository import (
    SupabaseDistributionRepository,
)
from film_distribution.adapters.supabase_film_repository import (
    SupabaseFilmRepository,
)
from film_distribution.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from film_distribution.config import Settings
from film_distribution.services.auth import AuthService
from film_distribution.services.films import FilmStore


@dataclass
class AppContainer:
    """Holds application-wide state and dependencies."""

    settings: Settings
    auth_service: AuthService
    film_store: FilmStore
    close_resources: Callable[[], Awaitable[None]]


async def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = await acreate_client(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    auth_service = AuthService(
        auth_client=SupabaseAuthClient(supabase_client),
        profile_repository=SupabaseProfileRepository(supabase_client),
    )
    film_store = FilmStore(
        film_repository=SupabaseFilmRepository(supabase_client),
        distribution_repository=SupabaseDistributionRepository(supabase_client),
    )

    async def close_resources() -> None:
        await auth_service.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        film_store=film_store,
        close_resources=close_resources,
    )
