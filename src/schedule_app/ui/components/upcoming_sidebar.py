from __future__ import annotations

import html
from typing import Iterable

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QListWidget, QListWidgetItem, QPushButton, QVBoxLayout, QWidget

from ...domain import ScheduleEntry, format_short


def entry_label(entry: ScheduleEntry) -> str:
    return f"{format_short(entry.date)}  {entry.time or '—'}  {entry.title}"


class UpcomingSidebar(QWidget):
    day_requested = pyqtSignal(str)
    refresh_requested = pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        self.setObjectName("sidebarPanel")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        self.user_label = QLabel("")
        layout.addWidget(self.user_label)

        header = QHBoxLayout()
        header.addWidget(QLabel("Upcoming schedules"), stretch=1)
        self.count_badge = QLabel("0")
        self.count_badge.setObjectName("badge")
        header.addWidget(self.count_badge)
        layout.addLayout(header)

        self.empty_label = QLabel("No schedules yet. Click a day on the calendar to add one.")
        self.empty_label.setObjectName("subtitle")
        self.empty_label.setWordWrap(True)
        layout.addWidget(self.empty_label)

        self.entry_list = QListWidget()
        self.entry_list.itemClicked.connect(self._emit_day)
        layout.addWidget(self.entry_list, stretch=1)

        refresh_button = QPushButton("Refresh")
        refresh_button.setObjectName("ghostButton")
        refresh_button.clicked.connect(self.refresh_requested)
        layout.addWidget(refresh_button)

    def set_user(self, email: str) -> None:
        self.user_label.setText(f"<b>{html.escape(email)}</b>")

    def set_entries(self, entries: Iterable[ScheduleEntry]) -> None:
        self.entry_list.clear()
        count = 0
        for entry in entries:
            item = QListWidgetItem(entry_label(entry))
            item.setData(Qt.ItemDataRole.UserRole, entry.date)
            tooltip = f"{entry.date} {entry.time} · {entry.title}" if entry.time else f"{entry.date} · {entry.title}"
            item.setToolTip(tooltip)
            self.entry_list.addItem(item)
            count += 1
        self.count_badge.setText(str(count))
        self.empty_label.setVisible(count == 0)
        self.entry_list.setVisible(count > 0)

    def _emit_day(self, item: QListWidgetItem) -> None:
        self.day_requested.emit(item.data(Qt.ItemDataRole.UserRole))
