"""Data access layer."""

from __future__ import annotations

from .live import EntrySubscription
from .supabase import SupabaseGateway

__all__ = ["EntrySubscription", "SupabaseGateway"]
