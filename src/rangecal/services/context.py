from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..config import AppSettings, get_settings
from ..data import SupabaseEventsBackend, SupabaseGateway
from ..data.repositories import EventRepository
from .events_manager import EventsManager
from .interface import EventsManagerInterface
from .local_manager import LocalEventsManager

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContext:
    """Shares settings, the Supabase gateway and the events repository."""

    settings: AppSettings = field(default_factory=get_settings)
    gateway: SupabaseGateway = field(init=False)
    events: EventRepository = field(init=False)

    def __post_init__(self) -> None:
        self.gateway = SupabaseGateway(self.settings.supabase)
        self.events = EventRepository(
            gateway=self.gateway,
            table_name=self.settings.storage.events_table,
        )


def build_events_manager(context: ServiceContext, *, demo_file: Optional[Path] = None) -> EventsManagerInterface:
    """Remote-backed manager when a Supabase session exists, local-only manager otherwise."""

    if not context.gateway.is_ready() and context.settings.supabase.has_tokens:
        try:
            context.gateway.restore_session()
        except Exception:  # noqa: BLE001
            logger.exception("Restoring the Supabase session failed")

    if context.gateway.is_ready():
        logger.info("Using the Supabase events table %s", context.settings.storage.events_table)
        return EventsManager(SupabaseEventsBackend(context.events))

    missing = context.settings.supabase.missing_env_vars
    if missing:
        logger.info("Supabase is not configured (missing %s); events stay local", ", ".join(missing))
    else:
        logger.info("No Supabase session available; events stay local")

    path = demo_file or context.settings.local.demo_file
    if path is not None:
        return LocalEventsManager.from_file(path)
    return LocalEventsManager()
