"""Web adapters exposing the resolver and notifier over HTTP."""

from ip_tracker.adapters.web.app import create_app
from ip_tracker.adapters.web.server import WebServer

__all__ = ["WebServer", "create_app"]
