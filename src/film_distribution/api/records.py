"""Film and distribution endpoints guarded by the current session."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from film_distribution.api.models import (
    DistributionCreate,
    DistributionUpdate,
    FilmCreate,
    FilmUpdate,
)
from film_distribution.domain.films import FilmStatus

if TYPE_CHECKING:
    from film_distribution.containers import AppContainer
    from film_distribution.domain.results import OperationResult
    from film_distribution.services.films import FilmStore

router = APIRouter(tags=["records"])


def bearer_matches_session(container: AppContainer, authorization: str | None) -> bool:
    """Return True when the bearer token is the current session's access token."""
    session = container.auth_service.session
    if session is None or not authorization:
        return False
    scheme, _, token = authorization.partition(" ")
    return scheme.lower() == "bearer" and token.strip() == session.access_token


async def require_session(
    request: Request, authorization: str | None = Header(default=None)
) -> None:
    """Reject requests that do not carry the current session's access token."""
    if not bearer_matches_session(request.app.state.container, authorization):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _store(request: Request) -> FilmStore:
    container: AppContainer = request.app.state.container
    return container.film_store


def _unwrap(result: OperationResult, store: FilmStore) -> object:
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=store.error or str(result.error),
        )
    return result.data


@router.get("/films", dependencies=[Depends(require_session)])
async def list_films(
    request: Request, status: FilmStatus | None = None, refresh: bool = False
) -> dict[str, object]:
    """Return cached films, optionally refreshed and filtered by status."""
    store = _store(request)
    if refresh or not store.films:
        _unwrap(await store.fetch_films(), store)
    films = store.films_by_status(status) if status else store.films
    return {"films": [asdict(film) for film in films]}


@router.post(
    "/films",
    dependencies=[Depends(require_session)],
    status_code=status.HTTP_201_CREATED,
)
async def create_film(body: FilmCreate, request: Request) -> dict[str, object]:
    """Create a film owned by the signed-in user unless one is given."""
    container: AppContainer = request.app.state.container
    payload = body.model_dump()
    if payload["user_id"] is None:
        session = container.auth_service.session
        payload["user_id"] = session.user_id if session else None
    film = _unwrap(await container.film_store.create_film(payload), _store(request))
    return {"film": asdict(film)}


@router.patch("/films/{film_id}", dependencies=[Depends(require_session)])
async def update_film(
    film_id: str, body: FilmUpdate, request: Request
) -> dict[str, object]:
    """Apply a partial update to a film."""
    store = _store(request)
    film = _unwrap(
        await store.update_film(film_id, body.model_dump(exclude_unset=True)), store
    )
    return {"film": asdict(film)}


@router.delete("/films/{film_id}", dependencies=[Depends(require_session)])
async def delete_film(film_id: str, request: Request) -> dict[str, str]:
    """Delete a film."""
    store = _store(request)
    _unwrap(await store.delete_film(film_id), store)
    return {"status": "ok"}


@router.get("/distributions", dependencies=[Depends(require_session)])
async def list_distributions(
    request: Request, film_id: str | None = None, refresh: bool = False
) -> dict[str, object]:
    """Return cached distributions, optionally filtered by film."""
    store = _store(request)
    if refresh or not store.distributions:
        _unwrap(await store.fetch_distributions(), store)
    distributions = (
        store.distributions_by_film(film_id) if film_id else store.distributions
    )
    return {"distributions": [asdict(dist) for dist in distributions]}


@router.post(
    "/distributions",
    dependencies=[Depends(require_session)],
    status_code=status.HTTP_201_CREATED,
)
async def create_distribution(
    body: DistributionCreate, request: Request
) -> dict[str, object]:
    """Create a distribution deal."""
    store = _store(request)
    distribution = _unwrap(await store.create_distribution(body.model_dump()), store)
    return {"distribution": asdict(distribution)}


@router.patch(
    "/distributions/{distribution_id}", dependencies=[Depends(require_session)]
)
async def update_distribution(
    distribution_id: str, body: DistributionUpdate, request: Request
) -> dict[str, object]:
    """Apply a partial update to a distribution."""
    store = _store(request)
    distribution = _unwrap(
        await store.update_distribution(
            distribution_id, body.model_dump(exclude_unset=True)
        ),
        store,
    )
    return {"distribution": asdict(distribution)}


@router.delete(
    "/distributions/{distribution_id}", dependencies=[Depends(require_session)]
)
async def delete_distribution(distribution_id: str, request: Request) -> dict[str, str]:
    """Delete a distribution."""
    store = _store(request)
    _unwrap(await store.delete_distribution(distribution_id), store)
    return {"status": "ok"}
