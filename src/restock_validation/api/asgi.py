"""ASGI entrypoint for the restock validation API."""

from restock_validation.api.app import create_app
from restock_validation.containers import build_container

app = create_app(build_container())
