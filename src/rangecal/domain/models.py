from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date as _date
from datetime import time as _time
from typing import Any, Dict, Mapping, Optional

from ..errors import ValidationError

_DATE_PATTERN = re.compile(r"^\d{8}$")
_TIME_PATTERN = re.compile(r"^\d{4}$")

# Fields a caller may change through an update.
MUTABLE_FIELDS = ("title", "description", "date", "start_time", "end_time", "background_color", "color")


@dataclass(frozen=True, slots=True, order=True)
class CalendarDate:
    """A calendar day. ``month`` runs from 0 (January) to 11 (December)."""

    year: int
    month: int
    day: int

    @classmethod
    def from_date(cls, value: _date) -> "CalendarDate":
        return cls(year=value.year, month=value.month - 1, day=value.day)

    def to_date(self) -> _date:
        return _date(self.year, self.month + 1, self.day)

    @classmethod
    def from_string(cls, value: str) -> "CalendarDate":
        """Parse a ``YYYYMMDD`` string. The day is not checked against the month length."""

        if not isinstance(value, str) or not _DATE_PATTERN.match(value):
            raise ValidationError(f"{value!r} does not fit the format YYYYMMDD")
        return cls(year=int(value[:4]), month=int(value[4:6]) - 1, day=int(value[6:]))

    def to_string(self) -> str:
        return f"{self.year:04d}{self.month + 1:02d}{self.day:02d}"

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month + 1:02d}-{self.day:02d}"


@dataclass(frozen=True, slots=True, order=True)
class TimeOfDay:
    hour: int
    minute: int = 0
    second: int = 0

    @classmethod
    def from_time(cls, value: _time) -> "TimeOfDay":
        return cls(hour=value.hour, minute=value.minute, second=value.second)

    def to_time(self) -> _time:
        return _time(self.hour, self.minute, self.second)

    @classmethod
    def from_string(cls, value: str) -> "TimeOfDay":
        """Parse a 24 hour ``HHMM`` string. Seconds are always zero."""

        if not isinstance(value, str) or not _TIME_PATTERN.match(value):
            raise ValidationError(f"{value!r} does not fit the format HHMM")
        hour, minute = int(value[:2]), int(value[2:])
        if hour > 23:
            raise ValidationError(f"hour cannot be larger than 23 in {value}")
        if minute > 59:
            raise ValidationError(f"minute cannot be larger than 59 in {value}")
        return cls(hour=hour, minute=minute)

    def to_string(self) -> str:
        return f"{self.hour:02d}{self.minute:02d}"

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"


def date_time_key(day: CalendarDate, time: TimeOfDay) -> str:
    """Sortable 12 character key used by the remote store (``YYYYMMDDHHMM``)."""

    return f"{day.to_string()}{time.to_string()}"


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    id: str
    title: str
    date: CalendarDate
    start_time: TimeOfDay
    description: Optional[str] = None
    end_time: Optional[TimeOfDay] = None
    background_color: Optional[str] = None
    color: Optional[str] = None

    @property
    def sort_key(self) -> tuple[CalendarDate, TimeOfDay]:
        return (self.date, self.start_time)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CalendarEvent":
        date_time = str(record["date_time"])
        if len(date_time) != 12:
            raise ValidationError(f"{date_time!r} does not fit the format YYYYMMDDHHMM")
        end_time = record.get("end_time")
        return cls(
            id=str(record.get("id") or ""),
            title=str(record.get("title") or ""),
            date=CalendarDate.from_string(date_time[:8]),
            start_time=TimeOfDay.from_string(date_time[8:]),
            description=record.get("description"),
            end_time=TimeOfDay.from_string(end_time) if end_time else None,
            background_color=record.get("background_color"),
            color=record.get("color"),
        )

    def to_record(self, *, user_id: Optional[str] = None) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "date_time": date_time_key(self.date, self.start_time),
            "end_time": self.end_time.to_string() if self.end_time else None,
            "background_color": self.background_color,
            "color": self.color,
        }
        if self.id:
            record["id"] = self.id
        if user_id is not None:
            record["user_id"] = user_id
        return record


def changes_to_record(changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate a field diff into the columns of the remote record.

    The remote store keeps date and start time in a single ``date_time`` column,
    so a diff touching either of them must carry both.
    """

    record: Dict[str, Any] = {}
    for name in ("title", "description", "background_color", "color"):
        if name in changes:
            record[name] = changes[name]
    if "end_time" in changes:
        end_time = changes["end_time"]
        record["end_time"] = end_time.to_string() if end_time else None
    if "date" in changes or "start_time" in changes:
        if "date" not in changes or "start_time" not in changes:
            raise ValidationError("date and start_time must be changed together on the remote store")
        record["date_time"] = date_time_key(changes["date"], changes["start_time"])
    return record
