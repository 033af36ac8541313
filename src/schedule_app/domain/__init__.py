"""Domain models and calendar logic for schedule entries."""

from __future__ import annotations

from .calendar import (
    DayCell,
    ViewMonth,
    build_month_grid,
    format_short,
    group_by_date,
    month_title,
    parse_date_key,
    to_date_key,
    upcoming_entries,
)
from .errors import (
    AuthenticationError,
    BackendNotConfiguredError,
    EntryNotFoundError,
    EntryStoreError,
    EntryValidationError,
    ScheduleAppError,
    SessionMissingError,
)
from .models import EntryFields, ScheduleEntry, UserAccount

__all__ = [
    "AuthenticationError",
    "BackendNotConfiguredError",
    "DayCell",
    "EntryFields",
    "EntryNotFoundError",
    "EntryStoreError",
    "EntryValidationError",
    "ScheduleAppError",
    "ScheduleEntry",
    "SessionMissingError",
    "UserAccount",
    "ViewMonth",
    "build_month_grid",
    "format_short",
    "group_by_date",
    "month_title",
    "parse_date_key",
    "to_date_key",
    "upcoming_entries",
]
