"""Ordering, searching and day arithmetic for calendar dates and events.

All comparison functions return ``-1``, ``0`` or ``1``. The binary searches take
a comparison function called as ``cmp(key, element)`` so that a sequence of
events can be searched with a bare date as the key.
"""

from __future__ import annotations

import calendar
from typing import Any, Callable, Sequence, Tuple

from .models import CalendarDate, CalendarEvent, TimeOfDay

Comparison = Callable[[Any, Any], int]


def _sign(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


def compare_dates(first: CalendarDate, second: CalendarDate) -> int:
    return _sign(first, second)


def compare_times(first: TimeOfDay, second: TimeOfDay) -> int:
    return _sign(first, second)


def compare_events(first: CalendarEvent, second: CalendarEvent) -> int:
    """Order events by date, then start time. Equal results are possible."""

    result = compare_dates(first.date, second.date)
    if result:
        return result
    return compare_times(first.start_time, second.start_time)


def compare_date_to_event(day: CalendarDate, event: CalendarEvent) -> int:
    return compare_dates(day, event.date)


def find_first_at_or_after(items: Sequence[Any], key: Any, cmp: Comparison) -> Tuple[bool, int]:
    """Locate the first element that is not smaller than ``key``.

    Returns ``(True, index)`` for the first exact match. Without a match the
    index is that of the nearest larger element, or the last index when every
    element is smaller, so callers must compare the element themselves.
    An empty sequence yields ``(False, -1)``.
    """

    if not items:
        return False, -1
    low, high = 0, len(items)
    while low < high:
        mid = (low + high) // 2
        if cmp(key, items[mid]) > 0:
            low = mid + 1
        else:
            high = mid
    if low < len(items) and cmp(key, items[low]) == 0:
        return True, low
    return False, min(low, len(items) - 1)


def find_last_at_or_before(items: Sequence[Any], key: Any, cmp: Comparison) -> Tuple[bool, int]:
    """Mirror of :func:`find_first_at_or_after` for the last element not larger than ``key``."""

    if not items:
        return False, -1
    low, high = 0, len(items)
    while low < high:
        mid = (low + high) // 2
        if cmp(key, items[mid]) >= 0:
            low = mid + 1
        else:
            high = mid
    index = low - 1
    if index >= 0 and cmp(key, items[index]) == 0:
        return True, index
    return False, max(index, 0)


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def days_in_month(year: int, month: int) -> int:
    """Number of days in ``month`` (0-based) of ``year``."""

    return calendar.monthrange(year, month + 1)[1]


def increment_date(day: CalendarDate) -> CalendarDate:
    if day.day < days_in_month(day.year, day.month):
        return CalendarDate(day.year, day.month, day.day + 1)
    if day.month < 11:
        return CalendarDate(day.year, day.month + 1, 1)
    return CalendarDate(day.year + 1, 0, 1)


def decrement_date(day: CalendarDate) -> CalendarDate:
    if day.day > 1:
        return CalendarDate(day.year, day.month, day.day - 1)
    if day.month > 0:
        year, month = day.year, day.month - 1
    else:
        year, month = day.year - 1, 11
    return CalendarDate(year, month, days_in_month(year, month))


__all__ = [
    "compare_date_to_event",
    "compare_dates",
    "compare_events",
    "compare_times",
    "days_in_month",
    "decrement_date",
    "find_first_at_or_after",
    "find_last_at_or_before",
    "increment_date",
    "is_leap_year",
]
