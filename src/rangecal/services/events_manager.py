"""Remote-backed events manager.

Events fetched from the remote store are kept locally, sorted by date and
start time. A :class:`RangeTracker` records which days have already been
fetched so that a request for a date range only goes to the network for the
days nobody has asked for yet. Requests that overlap a fetch already in flight
wait for it instead of fetching the same days again.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Any, List, Mapping, Optional, Set

from ..data.backend import EventsBackend, RemoteResult
from ..data.cache import OrderedEventStore, RangeTracker
from ..domain import CalendarDate, CalendarEvent
from ..domain.validation import ensure_valid_range
from ..errors import RemoteFailure, ValidationError
from .interface import (
    commit_update,
    ensure_valid_event,
    prepare_update,
    require_existing,
    wire_changes,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _RangeRequest:
    """Counts down the fetches one ``resolve_range`` call depends on."""

    future: "asyncio.Future[None]"
    remaining: int
    failure: Optional[str] = None

    def settle_one(self, success: bool, message: str) -> None:
        if not success and self.failure is None:
            self.failure = message or "Fetching events for range failed"
        self.remaining -= 1
        if self.remaining or self.future.done():
            return
        if self.failure is None:
            self.future.set_result(None)
        else:
            self.future.set_exception(RemoteFailure(self.failure))


class EventsManager:
    def __init__(self, backend: EventsBackend) -> None:
        self._backend = backend
        self._store = OrderedEventStore()
        self._tracker = RangeTracker()
        self._fetches: Set["asyncio.Task[None]"] = set()

    @property
    def store(self) -> OrderedEventStore:
        return self._store

    @property
    def tracker(self) -> RangeTracker:
        return self._tracker

    def find_by_id(self, event_id: str) -> Optional[CalendarEvent]:
        return self._store.find_by_id(event_id)

    def get_local_if_available(self, start: CalendarDate, end: CalendarDate) -> Optional[List[CalendarEvent]]:
        """Events from ``start`` to ``end`` if every one of those days is cached, else ``None``.

        ``None`` means "unknown" and must not be read as "no events".
        """

        if start > end:
            raise ValidationError("start date cannot be later than the end date")
        if not self._tracker.covers(start, end):
            return None
        return self._store.slice_by_date_range(start, end)

    async def resolve_range(self, start: CalendarDate, end: CalendarDate) -> List[CalendarEvent]:
        """Events from ``start`` to ``end`` (inclusive), fetching only the days not cached yet.

        Raises :class:`RemoteFailure` with the first failure message when any
        fetch this call depends on fails. Fetches that did succeed stay cached.
        """

        ensure_valid_range(start, end)
        cached = self.get_local_if_available(start, end)
        if cached is not None:
            return cached

        plan = self._tracker.claim(start, end)
        if plan.outstanding == 0:
            return self._store.slice_by_date_range(start, end)

        request = _RangeRequest(asyncio.get_running_loop().create_future(), plan.outstanding)
        for tracked in plan.to_wait:
            logger.debug("Waiting on the fetch already running for %s - %s", tracked.start, tracked.end)
            tracked.waiters.append(request.settle_one)
        for tracked in plan.to_fetch:
            tracked.waiters.append(request.settle_one)
        for tracked in plan.to_fetch:
            self._schedule_fetch(tracked.start, tracked.end)

        await request.future
        return self._store.slice_by_date_range(start, end)

    async def create(self, event: CalendarEvent) -> CalendarEvent:
        """Store ``event`` remotely and cache it. The id of ``event`` is ignored."""

        ensure_valid_event(event)
        if self.get_local_if_available(event.date, event.date) is None:
            await self.resolve_range(event.date, event.date)

        result = await self._backend.create_event(event)
        if not result.success:
            raise RemoteFailure(result.message or "Error creating event")

        created = replace(event, id=str(result.payload))
        self._store.insert(created)
        logger.debug("Created event %s on %s", created.id, created.date)
        return created

    async def update(self, event_id: str, changes: Mapping[str, Any]) -> CalendarEvent:
        current, diff = prepare_update(self._store, event_id, changes)
        if "date" in diff:
            # make sure the neighbours on the destination day are cached before moving there
            await self.resolve_range(diff["date"], diff["date"])

        result = await self._backend.update_event(event_id, wire_changes(current, diff))
        if not result.success:
            raise RemoteFailure(result.message or "Error updating event")
        return commit_update(self._store, event_id, diff)

    async def remove(self, event_id: str) -> CalendarEvent:
        existing = require_existing(self._store, event_id)
        result = await self._backend.delete_event(event_id)
        if not result.success:
            raise RemoteFailure(result.message or "Error deleting event")
        return self._store.remove(event_id) or existing

    async def aclose(self) -> None:
        """Let running fetches settle, then drop everything cached."""

        if self._fetches:
            await asyncio.gather(*self._fetches, return_exceptions=True)
        self._store.clear()
        self._tracker.clear()

    def _schedule_fetch(self, start: CalendarDate, end: CalendarDate) -> None:
        logger.debug("Fetching events for %s - %s", start, end)
        task = asyncio.create_task(self._fetch(start, end))
        self._fetches.add(task)
        task.add_done_callback(self._fetch_finished)

    async def _fetch(self, start: CalendarDate, end: CalendarDate) -> None:
        try:
            result = await self._backend.fetch_events_in_range(start, end)
            if result.success:
                added = self._store.merge(result.payload or [])
                logger.debug("Cached %d events for %s - %s", added, start, end)
        except Exception:  # noqa: BLE001
            logger.exception("Fetching events for %s - %s raised", start, end)
            result = RemoteResult.failed("General error when fetching events for range")

        if result.success:
            self._tracker.settle(start, end, True)
        else:
            logger.warning("Fetching events for %s - %s failed: %s", start, end, result.message)
            self._tracker.settle(start, end, False, result.message)

    def _fetch_finished(self, task: "asyncio.Task[None]") -> None:
        self._fetches.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Settling a range fetch failed", exc_info=error)


__all__ = ["EventsManager"]
