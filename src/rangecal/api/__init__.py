"""Request and response models for the HTTP surface."""

from __future__ import annotations

from .models import CachedRangePayload, EventCreateRequest, EventPayload, EventUpdateRequest
from .serializers import serialize_event, serialize_events

__all__ = [
    "CachedRangePayload",
    "EventCreateRequest",
    "EventPayload",
    "EventUpdateRequest",
    "serialize_event",
    "serialize_events",
]
