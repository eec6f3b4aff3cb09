from __future__ import annotations


class CalendarError(RuntimeError):
    """Base class for errors raised by the event cache."""


class ValidationError(CalendarError):
    """Raised when a date or time is malformed. Detected before any remote call."""


class NotFoundError(CalendarError):
    """Raised when a mutation targets an event id that is not in the local store."""


class RemoteFailure(CalendarError):
    """Raised when the remote event store rejects or fails an operation."""


class RangeLookupFailure(CalendarError):
    """Raised when a tracked interval cannot be located while settling a fetch."""


__all__ = [
    "CalendarError",
    "NotFoundError",
    "RangeLookupFailure",
    "RemoteFailure",
    "ValidationError",
]
