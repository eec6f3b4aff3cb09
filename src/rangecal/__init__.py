"""Range-aware event cache for a calendar backed by a remote document store."""

from __future__ import annotations

from .domain import CalendarDate, CalendarEvent, TimeOfDay
from .services import EventsManager, EventsManagerInterface, LocalEventsManager

__all__ = [
    "CalendarDate",
    "CalendarEvent",
    "EventsManager",
    "EventsManagerInterface",
    "LocalEventsManager",
    "TimeOfDay",
    "main",
]


def main() -> int:
    from .cli import main as cli_main

    return cli_main()
