"""ASGI entrypoint for the Spoonacular proxy."""

from spoonacular_proxy.api.app import create_app
from spoonacular_proxy.containers import build_container

app = create_app(build_container())
