from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain import CalendarDate, CalendarEvent, TimeOfDay


def _minute_of_day(value: dt.time) -> TimeOfDay:
    """Stored times have minute precision; seconds are dropped."""

    return TimeOfDay(hour=value.hour, minute=value.minute)


class EventPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    date: dt.date
    start_time: dt.time
    description: Optional[str] = Field(default=None)
    end_time: Optional[dt.time] = Field(default=None)
    background_color: Optional[str] = Field(default=None)
    color: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, event: CalendarEvent) -> "EventPayload":
        return cls(
            id=event.id,
            title=event.title,
            date=event.date.to_date(),
            start_time=event.start_time.to_time(),
            description=event.description,
            end_time=event.end_time.to_time() if event.end_time else None,
            background_color=event.background_color,
            color=event.color,
        )


class EventCreateRequest(BaseModel):
    title: str = Field(min_length=1)
    date: dt.date
    start_time: dt.time
    description: Optional[str] = Field(default=None)
    end_time: Optional[dt.time] = Field(default=None)
    background_color: Optional[str] = Field(default=None)
    color: Optional[str] = Field(default=None)

    def to_domain(self) -> CalendarEvent:
        return CalendarEvent(
            id="",
            title=self.title,
            date=CalendarDate.from_date(self.date),
            start_time=_minute_of_day(self.start_time),
            description=self.description,
            end_time=_minute_of_day(self.end_time) if self.end_time else None,
            background_color=self.background_color,
            color=self.color,
        )


class EventUpdateRequest(BaseModel):
    """Partial update. Only the fields present in the request body are considered."""

    title: Optional[str] = Field(default=None, min_length=1)
    date: Optional[dt.date] = Field(default=None)
    start_time: Optional[dt.time] = Field(default=None)
    description: Optional[str] = Field(default=None)
    end_time: Optional[dt.time] = Field(default=None)
    background_color: Optional[str] = Field(default=None)
    color: Optional[str] = Field(default=None)

    def to_changes(self) -> dict:
        changes = self.model_dump(exclude_unset=True)
        if changes.get("date") is not None:
            changes["date"] = CalendarDate.from_date(changes["date"])
        for name in ("start_time", "end_time"):
            if changes.get(name) is not None:
                changes[name] = _minute_of_day(changes[name])
        return changes


class CachedRangePayload(BaseModel):
    available: bool
    events: List[EventPayload] = Field(default_factory=list)
