"""Supabase implementation for the films table."""

from dataclasses import dataclass

from supabase import AsyncClient

from film_distribution.adapters.supabase_query import as_float, execute_rows
from film_distribution.domain.films import Film
from film_distribution.domain.results import RemoteError
from film_distribution.services.films import FilmRepository

_TABLE = "films"


@dataclass
class SupabaseFilmRepository(FilmRepository):
    """Supabase-backed repository for films."""

    client: AsyncClient

    async def list_films(self) -> list[Film]:
        """Return all films ordered by creation time, newest first."""
        rows = await execute_rows(
            self.client.table(_TABLE).select("*").order("created_at", desc=True),
            "Failed to fetch films",
        )
        return [_parse_film(row) for row in rows]

    async def create_film(self, payload: dict[str, object]) -> Film:
        """Insert a film row and return it."""
        rows = await execute_rows(
            self.client.table(_TABLE).insert(payload), "Failed to create film"
        )
        if not rows:
            raise RemoteError("Failed to create film")
        return _parse_film(rows[0])

    async def update_film(self, film_id: str, payload: dict[str, object]) -> Film:
        """Update a film row and return it."""
        rows = await execute_rows(
            self.client.table(_TABLE).update(payload).eq("id", film_id),
            "Failed to update film",
        )
        if not rows:
            raise RemoteError(f"Film not found: {film_id}")
        return _parse_film(rows[0])

    async def delete_film(self, film_id: str) -> None:
        """Delete a film row by id."""
        await execute_rows(
            self.client.table(_TABLE).delete().eq("id", film_id),
            "Failed to delete film",
        )


def _parse_film(row: dict[str, object]) -> Film:
    """Parse a films row into a domain model."""
    return Film(
        id=str(row["id"]),
        title=str(row.get("title") or ""),
        director=str(row.get("director") or ""),
        genre=str(row.get("genre") or ""),
        release_year=int(row.get("release_year") or 0),
        duration_minutes=int(row.get("duration_minutes") or 0),
        description=str(row.get("description") or ""),
        status=str(row.get("status", "draft")),
        budget=as_float(row.get("budget")),
        revenue=as_float(row.get("revenue")),
        user_id=str(row.get("user_id") or ""),
        created_at=str(row.get("created_at") or ""),
        updated_at=str(row.get("updated_at") or ""),
    )
