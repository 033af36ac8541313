from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

logger = logging.getLogger(__name__)


class TaskSignals(QObject):
    completed = pyqtSignal(object)
    failed = pyqtSignal(Exception)
    finished = pyqtSignal()


class _Runnable(QRunnable):
    def __init__(
        self,
        fn: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        signals: TaskSignals,
    ) -> None:
        super().__init__()
        self.fn = fn
        self.args = args
        self.kwargs = kwargs
        self.signals = signals

    def run(self) -> None:  # noqa: D401
        try:
            result = self.fn(*self.args, **self.kwargs)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Background task %s failed: %s", getattr(self.fn, "__name__", self.fn), exc)
            self.signals.failed.emit(exc)
        else:
            self.signals.completed.emit(result)
        finally:
            self.signals.finished.emit()


@dataclass
class TaskHandle:
    signals: TaskSignals


class TaskRunner:
    """Runs blocking backend calls off the UI thread; callbacks fire on the UI thread."""

    def __init__(self, *, max_threads: Optional[int] = None) -> None:
        self.pool = QThreadPool.globalInstance()
        if max_threads is not None:
            self.pool.setMaxThreadCount(max_threads)
        self._pending: set[TaskSignals] = set()

    def submit(
        self,
        fn: Callable[..., Any],
        *args: Any,
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        **kwargs: Any,
    ) -> TaskHandle:
        signals = TaskSignals()
        if on_success:
            signals.completed.connect(on_success)
        if on_error:
            signals.failed.connect(on_error)
        self._pending.add(signals)
        signals.finished.connect(lambda: self._pending.discard(signals))
        self.pool.start(_Runnable(fn, args, kwargs, signals))
        return TaskHandle(signals=signals)
