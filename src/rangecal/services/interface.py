"""Contract shared by the remote-backed and the local-only events managers."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple

from ..data.cache import OrderedEventStore
from ..domain import CalendarDate, CalendarEvent
from ..domain.models import MUTABLE_FIELDS
from ..domain.validation import ensure_valid_date, ensure_valid_time
from ..errors import NotFoundError, ValidationError

# Fields an event cannot exist without; ``None`` for these means "leave unchanged".
_REQUIRED_FIELDS = frozenset({"title", "date", "start_time"})


class EventsManagerInterface(Protocol):
    def find_by_id(self, event_id: str) -> Optional[CalendarEvent]: ...

    def get_local_if_available(self, start: CalendarDate, end: CalendarDate) -> Optional[List[CalendarEvent]]: ...

    async def resolve_range(self, start: CalendarDate, end: CalendarDate) -> List[CalendarEvent]: ...

    async def create(self, event: CalendarEvent) -> CalendarEvent: ...

    async def update(self, event_id: str, changes: Mapping[str, Any]) -> CalendarEvent: ...

    async def remove(self, event_id: str) -> CalendarEvent: ...

    async def aclose(self) -> None: ...


def event_diff(current: CalendarEvent, changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the fields of ``changes`` that differ from ``current``, plus its id."""

    unknown = set(changes) - set(MUTABLE_FIELDS) - {"id"}
    if unknown:
        raise ValidationError(f"Unknown event fields: {', '.join(sorted(unknown))}")

    diff: Dict[str, Any] = {}
    for name in MUTABLE_FIELDS:
        if name not in changes:
            continue
        value = changes[name]
        if value is None and name in _REQUIRED_FIELDS:
            continue
        if value != getattr(current, name):
            diff[name] = value
    diff["id"] = current.id
    return diff


def moves_event(diff: Mapping[str, Any]) -> bool:
    return "date" in diff or "start_time" in diff


def ensure_valid_event(event: CalendarEvent) -> None:
    ensure_valid_date(event.date)
    ensure_valid_time(event.start_time)


def prepare_update(
    store: OrderedEventStore, event_id: str, changes: Mapping[str, Any]
) -> Tuple[CalendarEvent, Dict[str, Any]]:
    if not event_id:
        raise ValidationError("A valid event ID is required for updating an event")
    current = store.find_by_id(event_id)
    if current is None:
        raise NotFoundError(f"An event with the id {event_id} was not found")

    diff = event_diff(current, changes)
    if "start_time" in diff:
        ensure_valid_time(diff["start_time"])
    if "date" in diff:
        ensure_valid_date(diff["date"])
    return current, diff


def wire_changes(current: CalendarEvent, diff: Mapping[str, Any]) -> Dict[str, Any]:
    """The diff as sent to the remote store, where date and start time travel together."""

    changes = dict(diff)
    if moves_event(diff):
        changes.setdefault("date", current.date)
        changes.setdefault("start_time", current.start_time)
    return changes


def commit_update(store: OrderedEventStore, event_id: str, diff: Mapping[str, Any]) -> CalendarEvent:
    """Apply ``diff`` to the stored event, moving it only when its date or time changed."""

    current = store.find_by_id(event_id)
    if current is None:
        raise NotFoundError(f"An event with the id {event_id} was removed during the update")
    updated = replace(current, **{name: value for name, value in diff.items() if name != "id"})
    if updated.sort_key == current.sort_key:
        store.replace_at(store.index_of(event_id), updated)
    else:
        store.move(event_id, updated)
    return updated


def require_existing(store: OrderedEventStore, event_id: str) -> CalendarEvent:
    event = store.find_by_id(event_id)
    if event is None:
        raise NotFoundError(f"event with ID {event_id} was not found")
    return event
