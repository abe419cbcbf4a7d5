"""ASGI entrypoint for the film distribution API."""

from film_distribution.api.app import create_app

app = create_app()
