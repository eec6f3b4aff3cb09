from __future__ import annotations

from typing import Any, Dict, Iterable, List

from ..domain import CalendarEvent
from .models import EventPayload


def serialize_event(event: CalendarEvent) -> Dict[str, Any]:
    return EventPayload.from_domain(event).model_dump(mode="json")


def serialize_events(events: Iterable[CalendarEvent]) -> List[Dict[str, Any]]:
    return [serialize_event(event) for event in events]
