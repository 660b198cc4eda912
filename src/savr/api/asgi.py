"""ASGI entrypoint for the Savr API."""

from savr.api.app import create_app
from savr.containers import build_container

app = create_app(build_container())
