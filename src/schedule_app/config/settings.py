from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from platformdirs import user_data_dir

load_dotenv()

APP_NAME = "Schedule App"
APP_AUTHOR = "ScheduleApp"
DATA_DIR = Path(user_data_dir(APP_NAME, APP_AUTHOR))

DEFAULT_REFRESH_SECONDS = 30.0


@dataclass(frozen=True)
class SupabaseSettings:
    url: Optional[str]
    anon_key: Optional[str]

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.anon_key)

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
    entries_table: str


@dataclass(frozen=True)
class SyncSettings:
    refresh_interval: float

    @property
    def polling_enabled(self) -> bool:
        return self.refresh_interval > 0


@dataclass(frozen=True)
class UiSettings:
    app_name: str
    organization: str


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    directory: Path


@dataclass(frozen=True)
class AppSettings:
    supabase: SupabaseSettings
    storage: StorageSettings
    sync: SyncSettings
    ui: UiSettings
    logging: LoggingSettings


def _seconds_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        seconds = float(raw)
    except ValueError:
        return default
    return max(seconds, 0.0)


def load_settings() -> AppSettings:
    """Build settings from the current environment without caching."""

    supabase = SupabaseSettings(
        url=os.getenv("SUPABASE_URL"),
        anon_key=os.getenv("SUPABASE_ANON_KEY"),
    )

    storage = StorageSettings(
        entries_table=os.getenv("SCHEDULE_TABLE", "schedules"),
    )

    sync = SyncSettings(
        refresh_interval=_seconds_from_env("SCHEDULE_REFRESH_SECONDS", DEFAULT_REFRESH_SECONDS),
    )

    ui = UiSettings(
        app_name=os.getenv("SCHEDULE_APP_NAME", "Schedule"),
        organization=os.getenv("SCHEDULE_APP_ORG", APP_AUTHOR),
    )

    log_dir = os.getenv("SCHEDULE_LOG_DIR")
    logging = LoggingSettings(
        level=os.getenv("SCHEDULE_LOG_LEVEL", "INFO").upper(),
        directory=Path(log_dir) if log_dir else DATA_DIR,
    )

    return AppSettings(supabase=supabase, storage=storage, sync=sync, ui=ui, logging=logging)


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return load_settings()
