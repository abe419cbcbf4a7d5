"""Shared helpers for executing Supabase table queries."""

from typing import Any

from postgrest.exceptions import APIError

from film_distribution.domain.results import RemoteError


async def execute_rows(query: Any, failure: str) -> list[dict[str, Any]]:
    """Execute a PostgREST query and return its rows, raising RemoteError."""
    try:
        response = await query.execute()
    except APIError as exc:
        raise RemoteError(exc.message or failure) from exc
    return list(response.data or [])


def as_float(value: object) -> float:
    """Convert a numeric column that may be null."""
    if value is None:
        return 0.0
    return float(value)
