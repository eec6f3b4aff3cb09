"""Supabase repositories for calendar events."""

from __future__ import annotations

from .events import EventRepository

__all__ = ["EventRepository"]
