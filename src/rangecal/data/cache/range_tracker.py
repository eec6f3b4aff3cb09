from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Tuple

from ...domain import CalendarDate
from ...domain.dates import compare_dates, decrement_date, find_first_at_or_after, increment_date
from ...errors import RangeLookupFailure

logger = logging.getLogger(__name__)

# Called once with (success, message) when the fetch behind a pending range settles.
Waiter = Callable[[bool, str], None]


class RangeState(str, Enum):
    AVAILABLE = "available"
    PENDING = "pending"


@dataclass(slots=True)
class TrackedRange:
    start: CalendarDate
    end: CalendarDate
    state: RangeState
    waiters: List[Waiter] = field(default_factory=list)


@dataclass(slots=True)
class RangePlan:
    """Outcome of claiming a date span.

    ``to_fetch`` holds the gaps that were just added as pending ranges and
    need a remote fetch; ``to_wait`` holds ranges that were already pending.
    """

    to_fetch: List[TrackedRange] = field(default_factory=list)
    to_wait: List[TrackedRange] = field(default_factory=list)

    @property
    def outstanding(self) -> int:
        return len(self.to_fetch) + len(self.to_wait)


def _compare_date_to_range(day: CalendarDate, tracked: TrackedRange) -> int:
    return compare_dates(day, tracked.start)


class RangeTracker:
    """Ascending, non-overlapping date ranges that are cached or being fetched.

    Gaps between ranges are allowed and mean nothing is known about those days.
    """

    def __init__(self) -> None:
        self._ranges: List[TrackedRange] = []

    def __len__(self) -> int:
        return len(self._ranges)

    def ranges(self) -> List[TrackedRange]:
        return list(self._ranges)

    def available_spans(self) -> List[Tuple[CalendarDate, CalendarDate]]:
        return [(item.start, item.end) for item in self._ranges if item.state is RangeState.AVAILABLE]

    def pending_count(self) -> int:
        return sum(1 for item in self._ranges if item.state is RangeState.PENDING)

    def covers(self, start: CalendarDate, end: CalendarDate) -> bool:
        """True when a contiguous run of available ranges spans ``start`` to ``end``."""

        ranges = self._ranges
        if not ranges or start > ranges[-1].end or end < ranges[0].start:
            return False

        cursor = start
        for item in ranges:
            if cursor > end:
                break
            if item.end < cursor:
                continue
            if item.state is not RangeState.AVAILABLE or cursor < item.start:
                return False
            cursor = increment_date(item.end)
        return cursor > end

    def claim(self, start: CalendarDate, end: CalendarDate) -> RangePlan:
        """Add a pending range for every unknown gap in ``start``..``end``."""

        ranges = self._ranges
        plan = RangePlan()

        index = 0
        while index < len(ranges) and ranges[index].end < start:
            index += 1

        cursor = start
        while index < len(ranges) and ranges[index].start <= end and cursor <= end:
            current = ranges[index]
            if cursor < current.start:
                gap = TrackedRange(cursor, decrement_date(current.start), RangeState.PENDING)
                ranges.insert(index, gap)
                plan.to_fetch.append(gap)
                index += 1
            if current.state is RangeState.PENDING:
                plan.to_wait.append(current)
            cursor = increment_date(current.end)
            index += 1

        if cursor <= end:
            gap = TrackedRange(cursor, end, RangeState.PENDING)
            ranges.insert(index, gap)
            plan.to_fetch.append(gap)
        return plan

    def settle(self, start: CalendarDate, end: CalendarDate, success: bool, message: str = "") -> None:
        """Resolve the pending range ``start``..``end`` and notify its waiters.

        A successful fetch makes the range available; a failed one removes it
        so that the next request for those days fetches again.
        """

        index = self._locate(start, end)
        item = self._ranges[index]
        waiters, item.waiters = item.waiters, []
        if success:
            item.state = RangeState.AVAILABLE
            self._coalesce(index)
        else:
            del self._ranges[index]
        logger.debug("Range %s - %s settled (success=%s, waiters=%d)", start, end, success, len(waiters))
        for waiter in waiters:
            waiter(success, message)

    def clear(self) -> None:
        self._ranges.clear()

    def _locate(self, start: CalendarDate, end: CalendarDate) -> int:
        exact, index = find_first_at_or_after(self._ranges, start, _compare_date_to_range)
        if not exact or self._ranges[index].end != end or self._ranges[index].state is not RangeState.PENDING:
            raise RangeLookupFailure(f"Unable to find the pending range {start} - {end}")
        return index

    def _coalesce(self, index: int) -> None:
        ranges = self._ranges
        following = index + 1
        if following < len(ranges) and self._adjacent_available(ranges[index], ranges[following]):
            ranges[index].end = ranges[following].end
            del ranges[following]
        if index > 0 and self._adjacent_available(ranges[index - 1], ranges[index]):
            ranges[index - 1].end = ranges[index].end
            del ranges[index]

    @staticmethod
    def _adjacent_available(first: TrackedRange, second: TrackedRange) -> bool:
        return (
            first.state is RangeState.AVAILABLE
            and second.state is RangeState.AVAILABLE
            and increment_date(first.end) == second.start
        )


__all__ = ["RangePlan", "RangeState", "RangeTracker", "TrackedRange", "Waiter"]
