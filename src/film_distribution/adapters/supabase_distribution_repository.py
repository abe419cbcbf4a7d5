"""Supabase implementation for the distributions table."""

from dataclasses import dataclass

from supabase import AsyncClient

from film_distribution.adapters.supabase_query import as_float, execute_rows
from film_distribution.domain.films import Distribution
from film_distribution.domain.results import RemoteError
from film_distribution.services.films import DistributionRepository

_TABLE = "distributions"


@dataclass
class SupabaseDistributionRepository(DistributionRepository):
    """Supabase-backed repository for distribution deals."""

    client: AsyncClient

    async def list_distributions(self) -> list[Distribution]:
        """Return all distributions ordered by creation time, newest first."""
        rows = await execute_rows(
            self.client.table(_TABLE).select("*").order("created_at", desc=True),
            "Failed to fetch distributions",
        )
        return [_parse_distribution(row) for row in rows]

    async def create_distribution(self, payload: dict[str, object]) -> Distribution:
        """Insert a distribution row and return it."""
        rows = await execute_rows(
            self.client.table(_TABLE).insert(payload),
            "Failed to create distribution",
        )
        if not rows:
            raise RemoteError("Failed to create distribution")
        return _parse_distribution(rows[0])

    async def update_distribution(
        self, distribution_id: str, payload: dict[str, object]
    ) -> Distribution:
        """Update a distribution row and return it."""
        rows = await execute_rows(
            self.client.table(_TABLE).update(payload).eq("id", distribution_id),
            "Failed to update distribution",
        )
        if not rows:
            raise RemoteError(f"Distribution not found: {distribution_id}")
        return _parse_distribution(rows[0])

    async def delete_distribution(self, distribution_id: str) -> None:
        """Delete a distribution row by id."""
        await execute_rows(
            self.client.table(_TABLE).delete().eq("id", distribution_id),
            "Failed to delete distribution",
        )


def _parse_distribution(row: dict[str, object]) -> Distribution:
    start_date = row.get("start_date")
    end_date = row.get("end_date")
    return Distribution(
        id=str(row["id"]),
        film_id=str(row.get("film_id") or ""),
        distributor_name=str(row.get("distributor_name") or ""),
        territory=str(row.get("territory") or ""),
        distribution_type=str(row.get("distribution_type", "theatrical")),
        start_date=str(start_date) if start_date else None,
        end_date=str(end_date) if end_date else None,
        revenue_share=as_float(row.get("revenue_share")),
        guaranteed_minimum=as_float(row.get("guaranteed_minimum")),
        status=str(row.get("status", "negotiating")),
        created_at=str(row.get("created_at") or ""),
        updated_at=str(row.get("updated_at") or ""),
    )
