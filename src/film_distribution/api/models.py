"""Pydantic request bodies for the HTTP API."""

from pydantic import BaseModel

from film_distribution.domain.films import (
    DistributionStatus,
    DistributionType,
    FilmStatus,
)


class SignUpRequest(BaseModel):
    """Account creation payload."""

    email: str
    password: str
    full_name: str
    role: str


class SignInRequest(BaseModel):
    """Password sign-in payload."""

    email: str
    password: str


class FilmCreate(BaseModel):
    """Fields a client may set when creating a film."""

    title: str
    director: str
    genre: str
    release_year: int
    duration_minutes: int
    description: str = ""
    status: FilmStatus = "draft"
    budget: float = 0
    revenue: float = 0
    user_id: str | None = None


class FilmUpdate(BaseModel):
    """Partial film update."""

    title: str | None = None
    director: str | None = None
    genre: str | None = None
    release_year: int | None = None
    duration_minutes: int | None = None
    description: str | None = None
    status: FilmStatus | None = None
    budget: float | None = None
    revenue: float | None = None


class DistributionCreate(BaseModel):
    """Fields a client may set when creating a distribution."""

    film_id: str
    distributor_name: str
    territory: str
    distribution_type: DistributionType
    start_date: str | None = None
    end_date: str | None = None
    revenue_share: float = 0
    guaranteed_minimum: float = 0
    status: DistributionStatus = "negotiating"


class DistributionUpdate(BaseModel):
    """Partial distribution update."""

    distributor_name: str | None = None
    territory: str | None = None
    distribution_type: DistributionType | None = None
    start_date: str | None = None
    end_date: str | None = None
    revenue_share: float | None = None
    guaranteed_minimum: float | None = None
    status: DistributionStatus | None = None
