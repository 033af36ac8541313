from __future__ import annotations

import logging
from typing import List, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QMainWindow, QMessageBox, QPushButton, QSplitter, QVBoxLayout, QWidget

from ..api.state import ApiState
from ..config.settings import AppSettings
from ..domain import ScheduleEntry, UserAccount, build_month_grid, group_by_date, upcoming_entries
from ..domain.calendar import entries_for_day
from ..utils.qt import TaskRunner
from .components.day_dialog import DayDialog
from .components.month_grid import MonthGrid
from .components.upcoming_sidebar import UpcomingSidebar
from .state import (
    Action,
    AuthChanged,
    CancelEdit,
    CloseModal,
    EditEntry,
    EntriesLoaded,
    EntryDeleted,
    GoToday,
    NextMonth,
    PrevMonth,
    SelectDay,
    SubmitSucceeded,
    UpdateCommand,
    UpdateForm,
    ViewState,
    reduce,
    submission,
)

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    entries_received = pyqtSignal(object)
    subscription_failed = pyqtSignal(object)
    logout_requested = pyqtSignal()

    def __init__(self, *, api_state: ApiState, settings: AppSettings, user: UserAccount) -> None:
        super().__init__()
        self.api_state = api_state
        self.settings = settings
        self.runner = TaskRunner()
        self._torn_down = False
        self.state = reduce(ViewState(), AuthChanged(user))

        self.setWindowTitle(f"{settings.ui.app_name} - {user.email}")
        self.resize(1280, 820)

        central = QWidget()
        outer = QVBoxLayout(central)
        outer.setContentsMargins(16, 12, 16, 12)

        header = QHBoxLayout()
        heading = QVBoxLayout()
        title = QLabel(settings.ui.app_name)
        title.setObjectName("title")
        heading.addWidget(title)
        subtitle = QLabel("Click a day to add or edit schedules")
        subtitle.setObjectName("subtitle")
        heading.addWidget(subtitle)
        header.addLayout(heading, stretch=1)
        logout = QPushButton("Logout")
        logout.setObjectName("ghostButton")
        logout.clicked.connect(self.logout_requested)
        header.addWidget(logout)
        outer.addLayout(header)

        self.sidebar = UpcomingSidebar()
        self.sidebar.set_user(user.email)
        self.month_grid = MonthGrid()

        splitter = QSplitter()
        splitter.setOrientation(Qt.Orientation.Horizontal)
        splitter.addWidget(self.sidebar)
        splitter.addWidget(self.month_grid)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 3)
        outer.addWidget(splitter, stretch=1)
        self.setCentralWidget(central)

        self.day_dialog = DayDialog(self)

        self.month_grid.day_clicked.connect(lambda key: self.dispatch(SelectDay(key)))
        self.month_grid.previous_requested.connect(lambda: self.dispatch(PrevMonth()))
        self.month_grid.next_requested.connect(lambda: self.dispatch(NextMonth()))
        self.month_grid.today_requested.connect(lambda: self.dispatch(GoToday()))
        self.sidebar.day_requested.connect(lambda key: self.dispatch(SelectDay(key)))
        self.sidebar.refresh_requested.connect(self.refresh_entries)

        self.day_dialog.field_changed.connect(lambda name, value: self.dispatch(UpdateForm(name, value)))
        self.day_dialog.submit_requested.connect(self.submit_form)
        self.day_dialog.cancel_requested.connect(lambda: self.dispatch(CancelEdit()))
        self.day_dialog.edit_requested.connect(lambda entry_id: self.dispatch(EditEntry(entry_id)))
        self.day_dialog.delete_requested.connect(self.delete_entry)
        self.day_dialog.closed.connect(lambda: self.dispatch(CloseModal()))

        self.entries_received.connect(self._entries_received)
        self.subscription_failed.connect(self._subscription_failed)

        self.render()
        self._subscribe(user)

    # ------------------------------------------------------------------ state

    def dispatch(self, action: Action) -> None:
        self.state = reduce(self.state, action)
        self.render()

    def render(self) -> None:
        state = self.state
        cells = build_month_grid(state.view_month, selected=state.selected_date)
        buckets = group_by_date(state.entries)
        self.month_grid.render(state.view_month, cells, buckets)
        self.sidebar.set_entries(upcoming_entries(state.entries))

        if state.modal_open and state.selected_date:
            self.day_dialog.render(state, entries_for_day(state.entries, state.selected_date))
            if not self.day_dialog.isVisible():
                self.day_dialog.show()
        elif self.day_dialog.isVisible():
            self.day_dialog.hide()

    # ------------------------------------------------------------------ subscription

    def _subscribe(self, user: UserAccount) -> None:
        self.statusBar().showMessage("Loading schedules…")

        def worker() -> None:
            if self._torn_down:
                return
            self.api_state.schedule.listen_entries(
                user.id,
                self.entries_received.emit,
                on_error=self.subscription_failed.emit,
            )

        self.runner.submit(worker, on_error=self._subscription_failed)

    def _entries_received(self, entries: List[ScheduleEntry]) -> None:
        self.statusBar().showMessage(f"{len(entries)} schedules synchronized.", 3000)
        self.dispatch(EntriesLoaded(tuple(entries)))

    def _subscription_failed(self, exc: Exception) -> None:
        logger.error("Schedule subscription error: %s", exc)
        self.statusBar().showMessage(f"Could not load schedules: {exc}. Use Refresh to retry.")

    def refresh_entries(self) -> None:
        if self.api_state.schedule.subscription is None:
            self._subscribe(self.state.user)
            return
        self.runner.submit(self.api_state.schedule.refresh, on_error=self._subscription_failed)

    # ------------------------------------------------------------------ writes

    def submit_form(self) -> None:
        command = submission(self.state)
        if command is None:
            return
        user = self.state.user

        def worker() -> None:
            if isinstance(command, UpdateCommand):
                self.api_state.schedule.update_entry(command.entry_id, command.fields)
            else:
                self.api_state.schedule.create_entry(user.id, command.fields)

        self.runner.submit(
            worker,
            on_success=lambda _result: self.dispatch(SubmitSucceeded()),
            on_error=lambda exc: self._report_failure("Failed to save schedule. Please try again.", exc),
        )

    def delete_entry(self, entry_id: str) -> None:
        self.runner.submit(
            self.api_state.schedule.delete_entry,
            entry_id,
            on_success=lambda _result: self.dispatch(EntryDeleted(entry_id)),
            on_error=lambda exc: self._report_failure("Failed to delete schedule. Please try again.", exc),
        )

    # ------------------------------------------------------------------ misc

    def _report_failure(self, message: str, exc: Exception) -> None:
        logger.error("%s (%s)", message, exc)
        self.statusBar().showMessage(f"Error: {exc}", 5000)
        QMessageBox.critical(self, "Error", f"{message}\n\n{exc}")

    def teardown(self) -> None:
        self._torn_down = True
        self.api_state.schedule.stop_listening()
        self.day_dialog.hide()

    def closeEvent(self, event: Optional[QCloseEvent]) -> None:  # noqa: N802
        self.teardown()
        super().closeEvent(event)
