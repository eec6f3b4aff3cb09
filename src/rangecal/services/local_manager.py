from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

import orjson

from ..data.cache import OrderedEventStore
from ..domain import CalendarDate, CalendarEvent
from ..domain.validation import ensure_valid_range
from ..errors import ValidationError
from .interface import commit_update, ensure_valid_event, prepare_update, require_existing

logger = logging.getLogger(__name__)


class LocalEventsManager:
    """Events manager for when no remote store is reachable.

    Every date range counts as available and ids come from a local counter.
    """

    def __init__(self, events: Optional[Iterable[CalendarEvent]] = None) -> None:
        seed = list(events or [])
        self._store = OrderedEventStore(event for event in seed if event.id)
        self._next_id = len(seed)
        for event in seed:
            if not event.id:
                self._store.insert(replace(event, id=self._allocate_id()))

    @classmethod
    def from_file(cls, path: Path) -> "LocalEventsManager":
        """Seed the manager from a JSON array of event records."""

        records = orjson.loads(Path(path).read_bytes())
        if isinstance(records, dict):
            records = records.get("events", [])
        events = [CalendarEvent.from_record(record) for record in records]
        logger.info("Loaded %d local events from %s", len(events), path)
        return cls(events)

    @property
    def store(self) -> OrderedEventStore:
        return self._store

    def find_by_id(self, event_id: str) -> Optional[CalendarEvent]:
        return self._store.find_by_id(event_id)

    def get_local_if_available(self, start: CalendarDate, end: CalendarDate) -> Optional[List[CalendarEvent]]:
        if start > end:
            raise ValidationError("start date cannot be later than the end date")
        return self._store.slice_by_date_range(start, end)

    async def resolve_range(self, start: CalendarDate, end: CalendarDate) -> List[CalendarEvent]:
        ensure_valid_range(start, end)
        return self._store.slice_by_date_range(start, end)

    async def create(self, event: CalendarEvent) -> CalendarEvent:
        ensure_valid_event(event)
        created = replace(event, id=self._allocate_id())
        self._store.insert(created)
        return created

    async def update(self, event_id: str, changes: Mapping[str, Any]) -> CalendarEvent:
        _, diff = prepare_update(self._store, event_id, changes)
        return commit_update(self._store, event_id, diff)

    async def remove(self, event_id: str) -> CalendarEvent:
        existing = require_existing(self._store, event_id)
        self._store.remove(event_id)
        return existing

    async def aclose(self) -> None:
        self._store.clear()

    def _allocate_id(self) -> str:
        while self._store.find_by_id(str(self._next_id)) is not None:
            self._next_id += 1
        identifier = str(self._next_id)
        self._next_id += 1
        return identifier


__all__ = ["LocalEventsManager"]
