from __future__ import annotations

import heapq
from operator import attrgetter
from typing import Iterable, Iterator, List, Optional

from ...domain import CalendarDate, CalendarEvent
from ...domain.dates import (
    compare_date_to_event,
    compare_dates,
    compare_events,
    find_first_at_or_after,
    find_last_at_or_before,
)

_sort_key = attrgetter("sort_key")


class OrderedEventStore:
    """Events sorted by ``(date, start_time)`` with unique ids.

    Events sharing the same date and start time keep the order in which they
    were added; a newcomer is placed after the existing ones.
    """

    def __init__(self, events: Optional[Iterable[CalendarEvent]] = None) -> None:
        self._events: List[CalendarEvent] = []
        if events is not None:
            self.merge(events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[CalendarEvent]:
        return iter(list(self._events))

    def snapshot(self) -> List[CalendarEvent]:
        return list(self._events)

    def insertion_index(self, event: CalendarEvent) -> int:
        exact, index = find_last_at_or_before(self._events, event, compare_events)
        if index == -1:
            return 0
        if exact or compare_events(event, self._events[index]) > 0:
            return index + 1
        return index

    def slice_by_date_range(self, start: CalendarDate, end: CalendarDate) -> List[CalendarEvent]:
        events = self._events
        if not events:
            return []

        exact, first = find_first_at_or_after(events, start, compare_date_to_event)
        if not exact and compare_dates(start, events[first].date) > 0:
            return []  # the range starts after the last stored event

        exact, last = find_last_at_or_before(events, end, compare_date_to_event)
        if not exact and compare_dates(end, events[last].date) < 0:
            return []  # the range ends before the first stored event

        return events[first : last + 1]

    def index_of(self, event_id: str) -> int:
        for index, event in enumerate(self._events):
            if event.id == event_id:
                return index
        return -1

    def find_by_id(self, event_id: str) -> Optional[CalendarEvent]:
        index = self.index_of(event_id)
        return self._events[index] if index != -1 else None

    def insert(self, event: CalendarEvent) -> int:
        if self.index_of(event.id) != -1:
            raise ValueError(f"An event with the id {event.id} is already stored")
        index = self.insertion_index(event)
        self._events.insert(index, event)
        return index

    def replace_at(self, index: int, event: CalendarEvent) -> None:
        """Swap an entry for a version with the same date and start time."""

        if self._events[index].sort_key != event.sort_key:
            raise ValueError("replace_at cannot change the position of an event; use move()")
        self._events[index] = event

    def move(self, event_id: str, updated: CalendarEvent) -> int:
        """Replace ``event_id`` with ``updated`` at the position its new date and time require."""

        old_index = self.index_of(event_id)
        if old_index == -1:
            raise KeyError(event_id)
        new_index = self.insertion_index(updated)
        self._events.insert(new_index, updated)
        if new_index <= old_index:
            old_index += 1
        del self._events[old_index]
        return new_index if new_index < old_index else new_index - 1

    def remove(self, event_id: str) -> Optional[CalendarEvent]:
        index = self.index_of(event_id)
        if index == -1:
            return None
        return self._events.pop(index)

    def merge(self, events: Iterable[CalendarEvent]) -> int:
        """Add a batch of events in any order, skipping ids already stored.

        Returns the number of events added.
        """

        seen = {event.id for event in self._events}
        incoming: List[CalendarEvent] = []
        for event in events:
            if event.id in seen:
                continue
            seen.add(event.id)
            incoming.append(event)
        if not incoming:
            return 0
        incoming.sort(key=_sort_key)

        low = self.insertion_index(incoming[0])
        high = self.insertion_index(incoming[-1])
        if low == high:
            self._events[low:low] = incoming
        else:
            self._events[:] = list(heapq.merge(self._events, incoming, key=_sort_key))
        return len(incoming)

    def clear(self) -> None:
        self._events.clear()


__all__ = ["OrderedEventStore"]
