"""Domain models and ordering rules for calendar events."""

from __future__ import annotations

from .models import CalendarDate, CalendarEvent, TimeOfDay, changes_to_record, date_time_key

__all__ = ["CalendarDate", "CalendarEvent", "TimeOfDay", "changes_to_record", "date_time_key"]
