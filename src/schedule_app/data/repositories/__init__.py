"""Supabase repositories for first-class domain objects."""

from __future__ import annotations

from .entries import EntryRepository

__all__ = ["EntryRepository"]
