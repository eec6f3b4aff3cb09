"""Data access layer."""

from __future__ import annotations

from .backend import EventsBackend, RemoteResult
from .cache import OrderedEventStore, RangeState, RangeTracker
from .remote import SupabaseEventsBackend
from .supabase import SupabaseGateway, SupabaseNotInitializedError, SupabaseSessionMissingError

__all__ = [
    "EventsBackend",
    "OrderedEventStore",
    "RangeState",
    "RangeTracker",
    "RemoteResult",
    "SupabaseEventsBackend",
    "SupabaseGateway",
    "SupabaseNotInitializedError",
    "SupabaseSessionMissingError",
]
