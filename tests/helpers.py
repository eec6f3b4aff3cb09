"""Builders and a scripted in-memory backend shared by the tests."""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from rangecal.data.backend import RemoteResult
from rangecal.domain import CalendarDate, CalendarEvent, TimeOfDay


def day(year: int, month: int, day_of_month: int) -> CalendarDate:
    """Build a CalendarDate from a calendar (1-based) month."""
    return CalendarDate.from_date(date(year, month, day_of_month))


def make_event(
    event_id: str,
    when: CalendarDate,
    hour: int,
    minute: int = 0,
    *,
    title: Optional[str] = None,
    description: Optional[str] = None,
) -> CalendarEvent:
    return CalendarEvent(
        id=event_id,
        title=title or f"Event {event_id}",
        date=when,
        start_time=TimeOfDay(hour, minute),
        description=description,
    )


def is_sorted(events: Iterable[CalendarEvent]) -> bool:
    keys = [event.sort_key for event in events]
    return keys == sorted(keys)


class FakeBackend:
    """Remote store double that records every call.

    Setting ``gate`` to an ``asyncio.Event`` holds every fetch open until the
    event is set. ``failing_spans`` maps a requested ``(start, end)`` to the
    failure message returned for it; ``fetch_payload`` replaces every successful
    fetch result. Fetch results are returned newest-first to make sure the
    caller does not rely on the remote ordering.
    """

    def __init__(self, events: Iterable[CalendarEvent] = ()) -> None:
        self.events: List[CalendarEvent] = list(events)
        self.fetch_calls: List[Tuple[CalendarDate, CalendarDate]] = []
        self.created: List[CalendarEvent] = []
        self.updates: List[Tuple[str, Dict[str, Any]]] = []
        self.deletes: List[str] = []
        self.gate: Optional[asyncio.Event] = None
        self.fetch_failure: Optional[str] = None
        self.fetch_error: Optional[Exception] = None
        self.fetch_payload: Optional[Any] = None
        self.failing_spans: Dict[Tuple[CalendarDate, CalendarDate], str] = {}
        self.create_failure: Optional[str] = None
        self.update_failure: Optional[str] = None
        self.delete_failure: Optional[str] = None
        self._next_id = 1000

    async def fetch_events_in_range(self, start: CalendarDate, end: CalendarDate) -> RemoteResult[List[CalendarEvent]]:
        self.fetch_calls.append((start, end))
        if self.gate is not None:
            await self.gate.wait()
        if self.fetch_error is not None:
            raise self.fetch_error
        if self.fetch_failure is not None:
            return RemoteResult.failed(self.fetch_failure)
        if (start, end) in self.failing_spans:
            return RemoteResult.failed(self.failing_spans[(start, end)])
        if self.fetch_payload is not None:
            return RemoteResult.ok(self.fetch_payload)
        matching = [event for event in self.events if start <= event.date <= end]
        return RemoteResult.ok(list(reversed(matching)))

    async def create_event(self, event: CalendarEvent) -> RemoteResult[str]:
        if self.create_failure is not None:
            return RemoteResult.failed(self.create_failure)
        self._next_id += 1
        self.created.append(event)
        return RemoteResult.ok(str(self._next_id))

    async def update_event(self, event_id: str, changes: Dict[str, Any]) -> RemoteResult[None]:
        self.updates.append((event_id, dict(changes)))
        if self.update_failure is not None:
            return RemoteResult.failed(self.update_failure)
        return RemoteResult.ok()

    async def delete_event(self, event_id: str) -> RemoteResult[None]:
        self.deletes.append(event_id)
        if self.delete_failure is not None:
            return RemoteResult.failed(self.delete_failure)
        return RemoteResult.ok()
