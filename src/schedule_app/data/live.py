from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

from ..domain import ScheduleAppError, ScheduleEntry

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[List[ScheduleEntry]], None]
ErrorCallback = Callable[[Exception], None]


class EntrySubscription:
    """Standing query that pushes a user's full entry set to ``on_change``.

    The current set is delivered once by :meth:`start`, then again whenever a
    refresh observes a different snapshot. Refreshes are triggered by local
    writes and, when ``interval`` is positive, by a background poll. Nothing is
    delivered after :meth:`close`.
    """

    def __init__(
        self,
        user_id: str,
        fetch: Callable[[], List[ScheduleEntry]],
        on_change: ChangeCallback,
        *,
        on_error: Optional[ErrorCallback] = None,
        on_close: Optional[Callable[["EntrySubscription"], None]] = None,
    ) -> None:
        self.user_id = user_id
        self._fetch = fetch
        self._on_change = on_change
        self._on_error = on_error
        self._on_close = on_close
        self._lock = threading.RLock()
        self._closed = threading.Event()
        self._snapshot: Optional[tuple[ScheduleEntry, ...]] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def active(self) -> bool:
        return not self._closed.is_set()

    def start(self, interval: float = 0) -> "EntrySubscription":
        self.refresh()
        if interval > 0 and self.active:
            self._thread = threading.Thread(
                target=self._poll,
                args=(interval,),
                name=f"entries-{self.user_id}",
                daemon=True,
            )
            self._thread.start()
        return self

    def refresh(self) -> bool:
        """Fetch the latest entries and deliver them if they changed."""

        with self._lock:
            if not self.active:
                return False
            try:
                entries = self._fetch()
            except ScheduleAppError as exc:
                logger.warning("Refreshing schedules for %s failed: %s", self.user_id, exc)
                self._report(exc)
                return False
            except Exception as exc:  # noqa: BLE001
                logger.exception("Unexpected error refreshing schedules for %s", self.user_id)
                self._report(exc)
                return False
            snapshot = tuple(entries)
            if snapshot == self._snapshot or not self.active:
                return False
            self._snapshot = snapshot
            self._on_change(list(snapshot))
            return True

    def _report(self, exc: Exception) -> None:
        if self._on_error is not None:
            self._on_error(exc)

    def _poll(self, interval: float) -> None:
        while not self._closed.wait(interval):
            try:
                self.refresh()
            except Exception:  # noqa: BLE001
                logger.exception("Schedule poll for %s failed; retrying in %ss", self.user_id, interval)

    def close(self) -> None:
        if self._closed.is_set():
            return
        self._closed.set()
        logger.debug("Closed schedule subscription for %s", self.user_id)
        if self._on_close is not None:
            self._on_close(self)

    def __enter__(self) -> "EntrySubscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
