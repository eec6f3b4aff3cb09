"""Configuration models and helpers."""

from __future__ import annotations

from .settings import AppSettings, LocalSettings, LoggingSettings, StorageSettings, SupabaseSettings, get_settings

__all__ = ["AppSettings", "LocalSettings", "LoggingSettings", "StorageSettings", "SupabaseSettings", "get_settings"]
