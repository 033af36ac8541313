from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from ...domain import EntryNotFoundError, EntryStoreError, ScheduleEntry
from ..supabase import SupabaseGateway

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EntryRepository:
    """Rows of the ``schedules`` table, always scoped by ``user_id``."""

    gateway: SupabaseGateway
    table_name: str

    def _execute(self, action: str, query) -> List[Dict[str, Any]]:
        try:
            response = query.execute()
        except Exception as exc:  # noqa: BLE001
            logger.exception("Supabase %s on %s failed", action, self.table_name)
            raise EntryStoreError(str(exc) or f"Failed to {action} schedule.") from exc
        return list(response.data or [])

    def _to_entry(self, record: Dict[str, Any]) -> ScheduleEntry:
        try:
            return ScheduleEntry.from_record(record)
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Unreadable row in %s: %r", self.table_name, record)
            raise EntryStoreError(f"Schedule row {record.get('id', '?')} is malformed: {exc!r}") from exc

    def list_for_user(self, user_id: str) -> List[ScheduleEntry]:
        query = self.gateway.table(self.table_name).select("*").eq("user_id", user_id)
        records = self._execute("select", query)
        return [self._to_entry(record) for record in records]

    def insert(self, entry: ScheduleEntry) -> ScheduleEntry:
        payload = entry.to_record()
        records = self._execute("insert", self.gateway.table(self.table_name).insert(payload))
        return self._to_entry(records[0] if records else payload)

    def update(self, entry_id: str, user_id: str, changes: Dict[str, Any]) -> ScheduleEntry:
        query = (
            self.gateway.table(self.table_name)
            .update(changes)
            .eq("id", entry_id)
            .eq("user_id", user_id)
        )
        records = self._execute("update", query)
        if not records:
            raise EntryNotFoundError(f"Schedule {entry_id} was not found.")
        return self._to_entry(records[0])

    def delete(self, entry_id: str, user_id: str) -> None:
        query = (
            self.gateway.table(self.table_name)
            .delete()
            .eq("id", entry_id)
            .eq("user_id", user_id)
        )
        if not self._execute("delete", query):
            raise EntryNotFoundError(f"Schedule {entry_id} was not found.")
