"""ASGI entrypoint for the hotel directory API."""

from hotel_directory.api.app import create_app
from hotel_directory.containers import build_container

app = create_app(build_container())
