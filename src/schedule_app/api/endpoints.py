from __future__ import annotations

from typing import Any, Dict, List

from ..domain.calendar import WEEKDAYS, ViewMonth, build_month_grid, format_short, month_title
from .registry import get_api_functions, register_api
from .state import api_state


def _entries_payload(entries) -> List[Dict[str, Any]]:
    payload = []
    for entry in entries:
        record = entry.to_dict()
        record["label"] = format_short(entry.date)
        payload.append(record)
    return payload


@register_api(
    "schedule_month_grid",
    description="Return the 42 Sunday-first day cells shown for a month (YYYY-MM, defaults to the current month).",
    category="calendar",
    tags=("calendar", "grid"),
)
def schedule_month_grid(month: str = "", selected: str = "") -> Dict[str, Any]:
    view = ViewMonth.parse(month) if month else ViewMonth.current()
    cells = build_month_grid(view, selected=selected or None)
    return {
        "month": str(view),
        "title": month_title(view),
        "weekdays": list(WEEKDAYS),
        "cells": [
            {
                "date": cell.key,
                "day": cell.day,
                "in_month": cell.in_month,
                "is_today": cell.is_today,
                "is_selected": cell.is_selected,
            }
            for cell in cells
        ],
    }


@register_api(
    "schedule_list_entries",
    description="Return every schedule entry of the signed-in user, ordered by date and time.",
    category="schedule",
    tags=("schedule", "list"),
)
def schedule_list_entries() -> Dict[str, List[dict]]:
    return {"entries": _entries_payload(api_state.schedule.list_entries())}


@register_api(
    "schedule_upcoming_entries",
    description="Return entries dated today or later, ordered by date and time.",
    category="schedule",
    tags=("schedule", "upcoming"),
)
def schedule_upcoming_entries() -> Dict[str, Any]:
    entries = api_state.schedule.upcoming()
    return {"count": len(entries), "entries": _entries_payload(entries)}


@register_api(
    "schedule_entries_for_day",
    description="Return the entries on a specific day (YYYY-MM-DD).",
    category="schedule",
    tags=("schedule", "day"),
)
def schedule_entries_for_day(day: str) -> Dict[str, Any]:
    return {"date": day, "entries": _entries_payload(api_state.schedule.entries_for_day(day))}


@register_api(
    "schedule_create_entry",
    description="Create a schedule entry. Title and date (YYYY-MM-DD) are required; time is HH:MM.",
    category="schedule",
    tags=("schedule", "write"),
)
def schedule_create_entry(title: str, date: str, time: str = "", notes: str = "") -> Dict[str, str]:
    user_id = api_state.context.gateway.current_user_id()
    entry_id = api_state.schedule.create_entry(
        user_id, {"title": title, "date": date, "time": time, "notes": notes}
    )
    return {"id": entry_id}


@register_api(
    "schedule_update_entry",
    description="Replace the title, date, time and notes of an existing entry.",
    category="schedule",
    tags=("schedule", "write"),
)
def schedule_update_entry(entry_id: str, title: str, date: str, time: str = "", notes: str = "") -> Dict[str, Any]:
    entry = api_state.schedule.update_entry(
        entry_id, {"title": title, "date": date, "time": time, "notes": notes}
    )
    return {"entry": entry.to_dict()}


@register_api(
    "schedule_delete_entry",
    description="Delete an entry owned by the signed-in user.",
    category="schedule",
    tags=("schedule", "write"),
)
def schedule_delete_entry(entry_id: str) -> Dict[str, str]:
    api_state.schedule.delete_entry(entry_id)
    return {"deleted": entry_id}


@register_api(
    "list_available_tools",
    description="List all API functions with descriptions, categories, and parameters.",
    category="meta",
    tags=("tools", "metadata"),
)
def list_available_tools() -> Dict[str, List[dict]]:
    return {"tools": [func.describe() for func in sorted(get_api_functions(), key=lambda item: item.name)]}
