"""Session-based access rules for application routes."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Route:
    """A named application route with its access requirements."""

    path: str
    name: str
    requires_auth: bool = False
    requires_guest: bool = False


LOGIN_PATH = "/login"
HOME_PATH = "/"

ROUTES: tuple[Route, ...] = (
    Route(path="/", name="home"),
    Route(path="/login", name="login", requires_guest=True),
    Route(path="/register", name="register", requires_guest=True),
    Route(path="/films", name="films", requires_auth=True),
    Route(path="/films/new", name="film-create", requires_auth=True),
    Route(path="/films/:id", name="film-detail", requires_auth=True),
    Route(path="/distributions", name="distributions", requires_auth=True),
    Route(path="/analytics", name="analytics", requires_auth=True),
    Route(path="/about", name="about"),
)


def match_route(path: str, routes: tuple[Route, ...] = ROUTES) -> Route | None:
    """Return the first route whose pattern matches the path."""
    segments = _segments(path)
    for route in routes:
        pattern = _segments(route.path)
        if len(pattern) != len(segments):
            continue
        if all(
            part.startswith(":") or part == segment
            for part, segment in zip(pattern, segments, strict=True)
        ):
            return route
    return None


def resolve_navigation(path: str, is_authenticated: bool) -> str | None:
    """Return the redirect target for a navigation, or None to allow it."""
    route = match_route(path)
    if route is None:
        return None
    if route.requires_auth and not is_authenticated:
        return LOGIN_PATH
    if route.requires_guest and is_authenticated:
        return HOME_PATH
    return None


def _segments(path: str) -> list[str]:
    return [part for part in path.split("?", 1)[0].split("/") if part]
