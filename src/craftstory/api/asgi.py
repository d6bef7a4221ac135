"""ASGI entrypoint for the CraftStory API."""

from craftstory.api.app import create_app
from craftstory.containers import build_container

app = create_app(build_container())
