"""Domain models for films and distribution deals."""

from dataclasses import dataclass
from typing import Literal

FilmStatus = Literal["draft", "in_distribution", "distributed", "archived"]
DistributionType = Literal["theatrical", "streaming", "digital", "home_video"]
DistributionStatus = Literal[
    "negotiating", "signed", "active", "completed", "cancelled"
]

# Assigned by the remote store, never sent on create.
SERVER_FIELDS = frozenset({"id", "created_at", "updated_at"})


@dataclass(frozen=True)
class Film:
    """Represents a film row stored in the films table."""

    id: str
    title: str
    director: str
    genre: str
    release_year: int
    duration_minutes: int
    description: str
    status: FilmStatus
    budget: float
    revenue: float
    user_id: str
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class Distribution:
    """Represents a distribution deal for a film."""

    id: str
    film_id: str
    distributor_name: str
    territory: str
    distribution_type: DistributionType
    start_date: str | None
    end_date: str | None
    revenue_share: float
    guaranteed_minimum: float
    status: DistributionStatus
    created_at: str
    updated_at: str
