from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from platformdirs import user_log_dir

load_dotenv()

APP_NAME = "rangecal"
APP_AUTHOR = "rangecal"


@dataclass(frozen=True)
class SupabaseSettings:
    url: Optional[str]
    anon_key: Optional[str]
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.anon_key)

    @property
    def has_tokens(self) -> bool:
        return bool(self.access_token and self.refresh_token)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.url:
            missing.append("SUPABASE_URL")
        if not self.anon_key:
            missing.append("SUPABASE_ANON_KEY")
        return missing


@dataclass(frozen=True)
class StorageSettings:
    events_table: str


@dataclass(frozen=True)
class LocalSettings:
    demo_file: Optional[Path]


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    directory: Path


@dataclass(frozen=True)
class AppSettings:
    supabase: SupabaseSettings
    storage: StorageSettings
    local: LocalSettings
    logging: LoggingSettings


def _path_from_env(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    return Path(raw).expanduser() if raw else None


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    supabase = SupabaseSettings(
        url=os.getenv("SUPABASE_URL"),
        anon_key=os.getenv("SUPABASE_ANON_KEY"),
        access_token=os.getenv("SUPABASE_ACCESS_TOKEN"),
        refresh_token=os.getenv("SUPABASE_REFRESH_TOKEN"),
    )

    storage = StorageSettings(
        events_table=os.getenv("RANGECAL_EVENTS_TABLE", "calendar_events"),
    )

    local = LocalSettings(demo_file=_path_from_env("RANGECAL_DEMO_FILE"))

    logging_settings = LoggingSettings(
        level=os.getenv("RANGECAL_LOG_LEVEL", "INFO").upper(),
        directory=_path_from_env("RANGECAL_LOG_DIR") or Path(user_log_dir(APP_NAME, APP_AUTHOR)),
    )

    return AppSettings(supabase=supabase, storage=storage, local=local, logging=logging_settings)
