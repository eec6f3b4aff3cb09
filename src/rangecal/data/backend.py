from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Protocol, TypeVar

from ..domain import CalendarDate, CalendarEvent

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class RemoteResult(Generic[T]):
    """Outcome of a call to the remote event store."""

    success: bool
    message: str = ""
    payload: T | None = None

    @classmethod
    def ok(cls, payload: T | None = None) -> "RemoteResult[T]":
        return cls(success=True, payload=payload)

    @classmethod
    def failed(cls, message: str) -> "RemoteResult[T]":
        return cls(success=False, message=message)


class EventsBackend(Protocol):
    """Remote store the events manager synchronises with.

    Results of ``fetch_events_in_range`` may come back in any order.
    """

    async def fetch_events_in_range(
        self, start: CalendarDate, end: CalendarDate
    ) -> RemoteResult[List[CalendarEvent]]: ...

    async def create_event(self, event: CalendarEvent) -> RemoteResult[str]: ...

    async def update_event(self, event_id: str, changes: Dict[str, Any]) -> RemoteResult[None]: ...

    async def delete_event(self, event_id: str) -> RemoteResult[None]: ...
