"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status

from film_distribution.api.models import SignInRequest, SignUpRequest
from film_distribution.api.records import bearer_matches_session, require_session
from film_distribution.api.records import router as records_router
from film_distribution.app_logging import configure_logging
from film_distribution.containers import AppContainer, build_container
from film_distribution.domain.auth import AuthResult
from film_distribution.domain.results import OperationResult
from film_distribution.services.access import resolve_navigation


def create_app(container: AppContainer | None = None) -> FastAPI:
    """Create a FastAPI app; the container is built on startup when omitted."""
    configure_logging(container.settings.log_level if container else "INFO")
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.container is None:
            app.state.container = await build_container()
        try:
            await app.state.container.auth_service.initialize()
        except Exception:
            logger.exception("Failed to initialize session tracking")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(records_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/auth/sign-up")
    async def sign_up(body: SignUpRequest, request: Request) -> dict[str, object]:
        """Create an account; the session arrives through session changes."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.auth_service.sign_up(
            body.email, body.password, body.full_name, body.role
        )
        return _auth_payload(result)

    @app.post("/auth/sign-in")
    async def sign_in(body: SignInRequest, request: Request) -> dict[str, object]:
        """Sign in with email and password."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.auth_service.sign_in(body.email, body.password)
        return _auth_payload(result)

    @app.post("/auth/sign-out", dependencies=[Depends(require_session)])
    async def sign_out(request: Request) -> dict[str, object]:
        """Sign out and report the resulting session state."""
        state_container: AppContainer = request.app.state.container
        await state_container.auth_service.sign_out()
        return {"is_authenticated": state_container.auth_service.is_authenticated}

    @app.get("/auth/session")
    async def current_session(
        request: Request, authorization: str | None = Header(default=None)
    ) -> dict[str, object]:
        """Return the session state and profile visible to the caller."""
        state_container: AppContainer = request.app.state.container
        auth_service = state_container.auth_service
        authorized = bearer_matches_session(state_container, authorization)
        return {
            "is_authenticated": authorized,
            "loading": auth_service.loading,
            "user": asdict(auth_service.user)
            if authorized and auth_service.user
            else None,
        }

    @app.get("/navigation")
    async def navigation(
        path: str, request: Request, authorization: str | None = Header(default=None)
    ) -> dict[str, str | None]:
        """Return where a client should be redirected for a route, if anywhere."""
        authorized = bearer_matches_session(request.app.state.container, authorization)
        return {"redirect": resolve_navigation(path, authorized)}

    return app


def _auth_payload(result: OperationResult[AuthResult]) -> dict[str, object]:
    if not result.ok or result.data is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(result.error)
        )
    session = result.data.session
    return {
        "user_id": result.data.user_id,
        "email": result.data.email,
        "access_token": session.access_token if session else None,
    }
