"""HTTP routes: server-rendered pages and the JSON API."""

from . import api
from . import ui

__all__ = ["api", "ui"]
