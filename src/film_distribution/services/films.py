"""Local film and distribution caches synchronized with the remote store."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol, TypeVar

from film_distribution.domain.films import SERVER_FIELDS, Distribution, Film
from film_distribution.domain.results import OperationResult, RemoteError

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Record(Protocol):
    id: str


R = TypeVar("R", bound=_Record)


class FilmRepository(Protocol):
    """Remote interface for the films table."""

    async def list_films(self) -> list[Film]:
        """Return all films, newest first."""

    async def create_film(self, payload: dict[str, object]) -> Film:
        """Insert a film and return the stored row."""

    async def update_film(self, film_id: str, payload: dict[str, object]) -> Film:
        """Apply a partial update and return the stored row."""

    async def delete_film(self, film_id: str) -> None:
        """Delete a film by id."""


class DistributionRepository(Protocol):
    """Remote interface for the distributions table."""

    async def list_distributions(self) -> list[Distribution]:
        """Return all distributions, newest first."""

    async def create_distribution(self, payload: dict[str, object]) -> Distribution:
        """Insert a distribution and return the stored row."""

    async def update_distribution(
        self, distribution_id: str, payload: dict[str, object]
    ) -> Distribution:
        """Apply a partial update and return the stored row."""

    async def delete_distribution(self, distribution_id: str) -> None:
        """Delete a distribution by id."""


@dataclass
class FilmStore:
    """Mirrors the films and distributions tables in memory.

    Every operation issues one remote request and only touches the local
    collections after the remote store confirms the change. ``loading`` and
    ``error`` are shared by both collections; the last operation to settle
    determines their value.
    """

    film_repository: FilmRepository
    distribution_repository: DistributionRepository
    films: list[Film] = field(default_factory=list)
    distributions: list[Distribution] = field(default_factory=list)
    loading: bool = False
    error: str | None = None

    def films_by_status(self, status: str) -> list[Film]:
        """Return cached films with the given status."""
        return [film for film in self.films if film.status == status]

    def distributions_by_film(self, film_id: str) -> list[Distribution]:
        """Return cached distributions that reference a film."""
        return [dist for dist in self.distributions if dist.film_id == film_id]

    async def fetch_films(self) -> OperationResult[list[Film]]:
        """Replace the films collection with the remote list."""

        def apply(films: list[Film]) -> None:
            self.films = list(films)

        return await self._sync(
            lambda: self.film_repository.list_films(),
            "fetch films",
            apply,
        )

    async def fetch_distributions(self) -> OperationResult[list[Distribution]]:
        """Replace the distributions collection with the remote list."""

        def apply(distributions: list[Distribution]) -> None:
            self.distributions = list(distributions)

        return await self._sync(
            lambda: self.distribution_repository.list_distributions(),
            "fetch distributions",
            apply,
        )

    async def create_film(self, payload: dict[str, object]) -> OperationResult[Film]:
        """Create a film remotely and prepend the stored row."""
        return await self._sync(
            lambda: self.film_repository.create_film(_client_fields(payload)),
            "create film",
            lambda film: self.films.insert(0, film),
        )

    async def update_film(
        self, film_id: str, updates: dict[str, object]
    ) -> OperationResult[Film]:
        """Update a film remotely and replace the cached row if present."""

        def apply(film: Film) -> None:
            _replace_by_id(self.films, film_id, film)

        return await self._sync(
            lambda: self.film_repository.update_film(film_id, _client_fields(updates)),
            "update film",
            apply,
        )

    async def delete_film(self, film_id: str) -> OperationResult[None]:
        """Delete a film remotely and drop it from the cache."""

        def apply(_: None) -> None:
            self.films = [film for film in self.films if film.id != film_id]

        return await self._sync(
            lambda: self.film_repository.delete_film(film_id),
            "delete film",
            apply,
        )

    async def create_distribution(
        self, payload: dict[str, object]
    ) -> OperationResult[Distribution]:
        """Create a distribution remotely and prepend the stored row."""
        return await self._sync(
            lambda: self.distribution_repository.create_distribution(
                _client_fields(payload)
            ),
            "create distribution",
            lambda distribution: self.distributions.insert(0, distribution),
        )

    async def update_distribution(
        self, distribution_id: str, updates: dict[str, object]
    ) -> OperationResult[Distribution]:
        """Update a distribution remotely and replace the cached row if present."""

        def apply(distribution: Distribution) -> None:
            _replace_by_id(self.distributions, distribution_id, distribution)

        return await self._sync(
            lambda: self.distribution_repository.update_distribution(
                distribution_id, _client_fields(updates)
            ),
            "update distribution",
            apply,
        )

    async def delete_distribution(self, distribution_id: str) -> OperationResult[None]:
        """Delete a distribution remotely and drop it from the cache."""

        def apply(_: None) -> None:
            self.distributions = [
                dist for dist in self.distributions if dist.id != distribution_id
            ]

        return await self._sync(
            lambda: self.distribution_repository.delete_distribution(distribution_id),
            "delete distribution",
            apply,
        )

    async def _sync(
        self,
        request: Callable[[], Awaitable[T]],
        action: str,
        apply: Callable[[T], None],
    ) -> OperationResult[T]:
        fallback = f"Failed to {action}"
        self.loading = True
        self.error = None
        try:
            data = await request()
        except RemoteError as exc:
            self.error = exc.message
            _logger.warning("%s: %s", fallback, exc.message)
            return OperationResult(error=exc)
        except Exception as exc:
            self.error = fallback
            _logger.exception(fallback)
            return OperationResult(error=exc)
        finally:
            self.loading = False
        apply(data)
        _logger.info("Remote sync applied: %s", action)
        return OperationResult(data=data)


def _client_fields(payload: dict[str, object]) -> dict[str, object]:
    """Drop fields only the remote store may assign."""
    return {key: value for key, value in payload.items() if key not in SERVER_FIELDS}


def _replace_by_id(items: list[R], record_id: str, record: R) -> None:
    # Rows not fetched yet are left alone.
    for index, item in enumerate(items):
        if item.id == record_id:
            items[index] = record
            return
