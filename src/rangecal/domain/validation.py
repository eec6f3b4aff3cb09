from __future__ import annotations

from typing import Optional

from ..errors import ValidationError
from .dates import days_in_month
from .models import CalendarDate, TimeOfDay


def validate_date(value: CalendarDate) -> Optional[str]:
    """Return a description of what is wrong with ``value``, or ``None`` when it is a real day."""

    if not isinstance(value, CalendarDate):
        return f"{value!r} is not a calendar date"
    if value.year < 1:
        return f"The year value {value.year} is too small. The year should be larger than 0"
    if value.year > 9999:
        return f"The year value {value.year} is too large. The year should not be larger than 9999"
    if not 0 <= value.month <= 11:
        return f"The month value {value.month} should be between 0 and 11 (inclusive)"
    if value.day < 1:
        return f"The day value {value.day} is too small. The day should be larger than 0"
    limit = days_in_month(value.year, value.month)
    if value.day > limit:
        return f"The day value {value.day} is too large. Month {value.month} of {value.year} has {limit} days"
    return None


def validate_time(value: TimeOfDay) -> Optional[str]:
    if not isinstance(value, TimeOfDay):
        return f"{value!r} is not a time of day"
    if not 0 <= value.hour <= 23:
        return f"Invalid hour value of {value.hour}. Hour must be between 0 and 23"
    if not 0 <= value.minute <= 59:
        return f"Invalid minute value of {value.minute}. Minute must be between 0 and 59"
    if not 0 <= value.second <= 59:
        return f"Invalid second value of {value.second}. Second must be between 0 and 59"
    return None


def ensure_valid_date(value: CalendarDate) -> CalendarDate:
    problem = validate_date(value)
    if problem:
        raise ValidationError(problem)
    return value


def ensure_valid_time(value: TimeOfDay) -> TimeOfDay:
    problem = validate_time(value)
    if problem:
        raise ValidationError(problem)
    return value


def ensure_valid_range(start: CalendarDate, end: CalendarDate) -> None:
    ensure_valid_date(start)
    ensure_valid_date(end)
    if start > end:
        raise ValidationError("start date cannot be later than the end date")
