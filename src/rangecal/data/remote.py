from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from ..domain import CalendarDate, CalendarEvent, changes_to_record
from ..domain.validation import validate_date
from .backend import RemoteResult
from .repositories import EventRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SupabaseEventsBackend:
    """Adapts :class:`EventRepository` to the asynchronous backend contract.

    Each query runs in a worker thread. Errors are reported as unsuccessful
    results rather than raised.
    """

    repository: EventRepository

    async def fetch_events_in_range(
        self, start: CalendarDate, end: CalendarDate
    ) -> RemoteResult[List[CalendarEvent]]:
        if validate_date(start) or validate_date(end):
            return RemoteResult.failed("Invalid input parameters")
        if start > end:
            return RemoteResult.failed("start date cannot be later than the end date")
        try:
            events = await asyncio.to_thread(self.repository.fetch_range, start, end)
        except Exception:  # noqa: BLE001
            logger.exception("Fetching events between %s and %s failed", start, end)
            return RemoteResult.failed("Network Error")
        return RemoteResult.ok(events)

    async def create_event(self, event: CalendarEvent) -> RemoteResult[str]:
        try:
            event_id = await asyncio.to_thread(self.repository.insert, event)
        except Exception:  # noqa: BLE001
            logger.exception("Creating event %r failed", event.title)
            return RemoteResult.failed("Error creating event")
        return RemoteResult.ok(event_id)

    async def update_event(self, event_id: str, changes: Dict[str, Any]) -> RemoteResult[None]:
        record = changes_to_record(changes)
        if not record:
            return RemoteResult.ok()
        try:
            updated = await asyncio.to_thread(self.repository.update, event_id, record)
        except Exception:  # noqa: BLE001
            logger.exception("Updating event %s failed", event_id)
            return RemoteResult.failed("Error updating event")
        if not updated:
            return RemoteResult.failed("Error updating event")
        return RemoteResult.ok()

    async def delete_event(self, event_id: str) -> RemoteResult[None]:
        try:
            deleted = await asyncio.to_thread(self.repository.delete, event_id)
        except Exception:  # noqa: BLE001
            logger.exception("Deleting event %s failed", event_id)
            return RemoteResult.failed("Error deleting event")
        if not deleted:
            return RemoteResult.failed("Error deleting event")
        return RemoteResult.ok()
