"""ASGI entrypoint for the panda gallery API."""

from panda_gallery.api.app import create_app
from panda_gallery.containers import build_container

app = create_app(build_container())
