"""ASGI entrypoint for the fuel logbook API."""

from fuel_logbook.api.app import create_app
from fuel_logbook.containers import build_container

app = create_app(build_container())
