"""ASGI entrypoint for the food inventory API."""

from food_inventory.api.app import create_app
from food_inventory.containers import build_container

app = create_app(build_container())
