"""Events managers and the wiring that picks one."""

from __future__ import annotations

from .context import ServiceContext, build_events_manager
from .events_manager import EventsManager
from .interface import EventsManagerInterface
from .local_manager import LocalEventsManager

__all__ = [
    "EventsManager",
    "EventsManagerInterface",
    "LocalEventsManager",
    "ServiceContext",
    "build_events_manager",
]
