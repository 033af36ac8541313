"""Month-grid generation and canonical date keys.

Dates are plain local wall-clock dates. A date's canonical key is its
zero-padded ``YYYY-MM-DD`` form; keys are what entries store, what the grid
compares against, and what entries are bucketed by.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Union

from .models import ScheduleEntry

GRID_CELLS = 42
MAX_CELL_PREVIEW = 3

WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_NAMES = tuple(calendar.month_name)[1:]
MONTH_ABBREVIATIONS = tuple(calendar.month_abbr)[1:]


def to_date_key(value: Union[date, datetime]) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_date_key(key: str) -> date:
    parts = key.split("-")
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Date key must be formatted YYYY-MM-DD, got {key!r}")
    year, month, day = (int(part) for part in parts)
    return date(year, month, day)


def format_short(key: str) -> str:
    """Render a key as ``"Jan 5"``."""

    parts = key.split("-")
    if len(parts) != 3:
        raise ValueError(f"Date key must be formatted YYYY-MM-DD, got {key!r}")
    month, day = int(parts[1]), int(parts[2])
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range in date key {key!r}")
    return f"{MONTH_ABBREVIATIONS[month - 1]} {day}"


def today_key() -> str:
    return to_date_key(date.today())


@dataclass(frozen=True, slots=True)
class ViewMonth:
    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")

    @classmethod
    def from_date(cls, value: Union[date, datetime]) -> "ViewMonth":
        return cls(value.year, value.month)

    @classmethod
    def current(cls) -> "ViewMonth":
        return cls.from_date(date.today())

    @classmethod
    def parse(cls, text: str) -> "ViewMonth":
        """Parse ``YYYY-MM`` (a full date key is accepted as well)."""

        parts = text.split("-")
        if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
            raise ValueError(f"Month must be formatted YYYY-MM, got {text!r}")
        return cls(int(parts[0]), int(parts[1]))

    def shift(self, months: int) -> "ViewMonth":
        index = self.year * 12 + (self.month - 1) + months
        return ViewMonth(index // 12, index % 12 + 1)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    def contains(self, value: date) -> bool:
        return value.year == self.year and value.month == self.month

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


def month_title(view: ViewMonth) -> str:
    return f"{MONTH_NAMES[view.month - 1]} {view.year}"


@dataclass(frozen=True, slots=True)
class DayCell:
    date: date
    day: int
    in_month: bool
    is_today: bool = False
    is_selected: bool = False

    @property
    def key(self) -> str:
        return to_date_key(self.date)


def build_month_grid(
    reference: Union[date, ViewMonth],
    *,
    today: Optional[date] = None,
    selected: Optional[str] = None,
) -> List[DayCell]:
    """Return the 42 Sunday-first cells shown for the month of ``reference``."""

    view = reference if isinstance(reference, ViewMonth) else ViewMonth.from_date(reference)
    today_value = to_date_key(today or date.today())

    first = view.first_day
    # date.weekday() is Monday-based; shift so Sunday is column 0.
    leading = (first.weekday() + 1) % 7
    days_in_month = view.days_in_month

    dates: list[date] = [first - timedelta(days=leading - offset) for offset in range(leading)]
    dates.extend(date(view.year, view.month, day) for day in range(1, days_in_month + 1))
    last = dates[-1]
    dates.extend(last + timedelta(days=step) for step in range(1, GRID_CELLS - len(dates) + 1))

    cells: list[DayCell] = []
    for value in dates:
        key = to_date_key(value)
        cells.append(
            DayCell(
                date=value,
                day=value.day,
                in_month=view.contains(value),
                is_today=key == today_value,
                is_selected=key == selected,
            )
        )
    return cells


def sort_entries(entries: Iterable[ScheduleEntry]) -> List[ScheduleEntry]:
    return sorted(entries, key=lambda entry: entry.sort_key)


def group_by_date(entries: Iterable[ScheduleEntry]) -> Dict[str, List[ScheduleEntry]]:
    buckets: dict[str, list[ScheduleEntry]] = {}
    for entry in sort_entries(entries):
        buckets.setdefault(entry.date, []).append(entry)
    return buckets


def entries_for_day(entries: Iterable[ScheduleEntry], key: str) -> List[ScheduleEntry]:
    return sort_entries(entry for entry in entries if entry.date == key)


def upcoming_entries(entries: Iterable[ScheduleEntry], *, today: Optional[date] = None) -> List[ScheduleEntry]:
    """Entries dated today or later, ordered by date then time."""

    cutoff = to_date_key(today) if today else today_key()
    return sort_entries(entry for entry in entries if entry.date >= cutoff)


def cell_preview(entries: List[ScheduleEntry], limit: int = MAX_CELL_PREVIEW) -> tuple[List[str], int]:
    """Titles to draw inside a grid cell plus the count hidden behind ``+N``."""

    titles = [entry.title for entry in entries[:limit]]
    return titles, max(len(entries) - limit, 0)
