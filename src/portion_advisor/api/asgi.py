"""ASGI entrypoint for the portion advisor API."""

from portion_advisor.api.app import create_app
from portion_advisor.containers import build_container

app = create_app(build_container())
