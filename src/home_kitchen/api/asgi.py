"""ASGI entrypoint for the storefront."""

from home_kitchen.api.app import create_app
from home_kitchen.containers import build_container

app = create_app(build_container())
