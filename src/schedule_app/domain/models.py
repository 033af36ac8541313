from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Dict, Mapping, Optional

from .errors import EntryValidationError

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    raise ValueError(f"Unsupported datetime value: {value!r}")


def normalize_date(value: Any) -> str:
    """Return the canonical ``YYYY-MM-DD`` key for a form or record value."""

    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value or "").strip()
    if not text:
        raise EntryValidationError("Date is required.")
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError as exc:
        raise EntryValidationError(f"Date must be formatted YYYY-MM-DD, got {text!r}.") from exc


def normalize_time(value: Any) -> str:
    """Return ``HH:MM`` or an empty string when no time was given."""

    if value is None:
        return ""
    if isinstance(value, time):
        return value.strftime("%H:%M")
    text = str(value).strip()
    if not text:
        return ""
    if len(text) == 8 and text.count(":") == 2:
        text = text[:5]
    if not _TIME_PATTERN.match(text):
        raise EntryValidationError(f"Time must be formatted HH:MM, got {text!r}.")
    return text


def _record_time(value: Any) -> str:
    try:
        return normalize_time(value)
    except EntryValidationError:
        return str(value)


@dataclass(frozen=True, slots=True)
class EntryFields:
    """Validated user-editable fields of a schedule entry."""

    title: str
    date: str
    time: str = ""
    notes: str = ""

    @classmethod
    def from_input(cls, fields: Mapping[str, Any]) -> "EntryFields":
        title = str(fields.get("title") or "").strip()
        if not title:
            raise EntryValidationError("Title is required.")
        return cls(
            title=title,
            date=normalize_date(fields.get("date")),
            time=normalize_time(fields.get("time")),
            notes=str(fields.get("notes") or "").strip(),
        )

    def to_record(self) -> Dict[str, Any]:
        return {"title": self.title, "date": self.date, "time": self.time, "notes": self.notes}


@dataclass(frozen=True, slots=True)
class ScheduleEntry:
    id: str
    user_id: str
    title: str
    date: str
    time: str = ""
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def sort_key(self) -> str:
        return f"{self.date} {self.time}"

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ScheduleEntry":
        return cls(
            id=str(record["id"]),
            user_id=str(record["user_id"]),
            title=str(record["title"]),
            date=str(record["date"]),
            time=_record_time(record.get("time")),
            notes=record.get("notes") or "",
            created_at=_parse_datetime(record.get("created_at")),
            updated_at=_parse_datetime(record.get("updated_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "date": self.date,
            "time": self.time,
            "notes": self.notes,
        }
        if self.created_at:
            record["created_at"] = self.created_at.isoformat()
        if self.updated_at:
            record["updated_at"] = self.updated_at.isoformat()
        return record

    def to_dict(self) -> Dict[str, Any]:
        return self.to_record()


@dataclass(frozen=True, slots=True)
class UserAccount:
    id: str
    email: str

    @classmethod
    def from_user(cls, user: Any) -> Optional["UserAccount"]:
        """Build an account from a Supabase ``User`` object, if there is one."""

        if user is None:
            return None
        identifier = getattr(user, "id", None)
        if not identifier:
            return None
        return cls(id=str(identifier), email=str(getattr(user, "email", "") or ""))
