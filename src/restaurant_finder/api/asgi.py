"""ASGI entrypoint for the restaurant finder API."""

from restaurant_finder.api.app import create_app
from restaurant_finder.containers import build_container

app = create_app(build_container())
