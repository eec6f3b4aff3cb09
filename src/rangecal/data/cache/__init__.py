"""In-memory caches kept by the events manager."""

from __future__ import annotations

from .event_store import OrderedEventStore
from .range_tracker import RangePlan, RangeState, RangeTracker, TrackedRange

__all__ = ["OrderedEventStore", "RangePlan", "RangeState", "RangeTracker", "TrackedRange"]
