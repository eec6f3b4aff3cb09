"""HTTP surface over the events manager."""

from .server import app, get_events_manager, run_local_server

__all__ = [
    "app",
    "get_events_manager",
    "run_local_server",
]
