from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, List, Mapping, Optional
from uuid import uuid4

from ..data import EntrySubscription
from ..data.live import ChangeCallback, ErrorCallback
from ..domain import EntryFields, ScheduleEntry
from ..domain.calendar import entries_for_day, sort_entries, upcoming_entries
from .context import ServiceContext

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class ScheduleService:
    context: ServiceContext
    _subscription: Optional[EntrySubscription] = field(default=None, init=False)

    def _user_id(self) -> str:
        return self.context.gateway.current_user_id()

    # ------------------------------------------------------------------ reads

    def list_entries(self, user_id: Optional[str] = None) -> List[ScheduleEntry]:
        return sort_entries(self.context.entries.list_for_user(user_id or self._user_id()))

    def entries_for_day(self, key: str, user_id: Optional[str] = None) -> List[ScheduleEntry]:
        return entries_for_day(self.list_entries(user_id), key)

    def upcoming(self, user_id: Optional[str] = None, *, today: Optional[date] = None) -> List[ScheduleEntry]:
        return upcoming_entries(self.list_entries(user_id), today=today)

    # ------------------------------------------------------------------ live subscription

    @property
    def subscription(self) -> Optional[EntrySubscription]:
        return self._subscription

    def listen_entries(
        self,
        user_id: str,
        on_change: ChangeCallback,
        *,
        on_error: Optional[ErrorCallback] = None,
        interval: Optional[float] = None,
    ) -> EntrySubscription:
        """Replace any active subscription with one scoped to ``user_id``."""

        self.stop_listening()
        subscription = EntrySubscription(
            user_id,
            lambda: self.list_entries(user_id),
            on_change,
            on_error=on_error,
            on_close=self._forget,
        )
        self._subscription = subscription
        if interval is None:
            sync = self.context.settings.sync
            interval = sync.refresh_interval if sync.polling_enabled else 0
        logger.info("Listening for schedule changes of %s (poll every %ss)", user_id, interval)
        return subscription.start(interval)

    def _forget(self, subscription: EntrySubscription) -> None:
        if self._subscription is subscription:
            self._subscription = None

    def stop_listening(self) -> None:
        if self._subscription is not None:
            self._subscription.close()

    def refresh(self) -> bool:
        if self._subscription is None:
            return False
        return self._subscription.refresh()

    def _notify(self, user_id: str) -> None:
        if self._subscription is None or self._subscription.user_id != user_id:
            return
        try:
            self._subscription.refresh()
        except Exception:  # noqa: BLE001
            logger.exception("Delivering schedules for %s after a write failed", user_id)

    # ------------------------------------------------------------------ writes

    def create_entry(self, user_id: str, fields: Mapping[str, Any]) -> str:
        values = EntryFields.from_input(fields)
        now = _utcnow()
        entry = ScheduleEntry(
            id=str(uuid4()),
            user_id=user_id,
            title=values.title,
            date=values.date,
            time=values.time,
            notes=values.notes,
            created_at=now,
            updated_at=now,
        )
        saved = self.context.entries.insert(entry)
        logger.info("Saved schedule %s on %s", saved.id, saved.date)
        self._notify(user_id)
        return saved.id

    def update_entry(self, entry_id: str, fields: Mapping[str, Any]) -> ScheduleEntry:
        values = EntryFields.from_input(fields)
        user_id = self._user_id()
        changes = {**values.to_record(), "updated_at": _utcnow().isoformat()}
        updated = self.context.entries.update(entry_id, user_id, changes)
        logger.info("Updated schedule %s", entry_id)
        self._notify(user_id)
        return updated

    def delete_entry(self, entry_id: str) -> None:
        user_id = self._user_id()
        self.context.entries.delete(entry_id, user_id)
        logger.info("Deleted schedule %s", entry_id)
        self._notify(user_id)
