"""Configuration models and helpers."""

from __future__ import annotations

from .settings import AppSettings, StorageSettings, SupabaseSettings, SyncSettings, get_settings, load_settings
from .theme import AppPalette

__all__ = [
    "AppSettings",
    "AppPalette",
    "StorageSettings",
    "SupabaseSettings",
    "SyncSettings",
    "get_settings",
    "load_settings",
]
