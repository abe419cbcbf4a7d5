"""Supabase-backed user profile repository."""

from dataclasses import dataclass

from supabase import AsyncClient

from film_distribution.adapters.supabase_query import execute_rows
from film_distribution.domain.auth import UserProfile
from film_distribution.services.auth import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Reads application profiles from the users table."""

    client: AsyncClient

    async def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the profile for a user id, if present."""
        rows = await execute_rows(
            self.client.table("users").select("*").eq("id", user_id).limit(1),
            "Failed to load profile",
        )
        if not rows:
            return None
        row = rows[0]
        created_at = row.get("created_at")
        return UserProfile(
            id=str(row["id"]),
            email=str(row.get("email") or ""),
            full_name=str(row.get("full_name") or ""),
            role=str(row.get("role", "producer")),
            created_at=str(created_at) if created_at else None,
        )
