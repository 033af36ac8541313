from __future__ import annotations

import html
from typing import Iterable

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ...domain import ScheduleEntry
from ..state import ViewState


class _EntryRow(QWidget):
    def __init__(self, entry: ScheduleEntry, dialog: "DayDialog") -> None:
        super().__init__()
        layout = QHBoxLayout(self)
        layout.setContentsMargins(6, 4, 6, 4)

        text = QVBoxLayout()
        heading = QLabel(f"<b>{html.escape(entry.title)}</b>  <span style='color:#64748b'>{entry.time or '—'}</span>")
        text.addWidget(heading)
        if entry.notes:
            notes = QLabel(html.escape(entry.notes))
            notes.setObjectName("subtitle")
            notes.setWordWrap(True)
            text.addWidget(notes)
        layout.addLayout(text, stretch=1)

        edit = QPushButton("Edit")
        edit.setObjectName("ghostButton")
        edit.clicked.connect(lambda: dialog.edit_requested.emit(entry.id))
        layout.addWidget(edit)

        delete = QPushButton("Delete")
        delete.setObjectName("dangerButton")
        delete.clicked.connect(lambda: dialog.delete_requested.emit(entry.id))
        layout.addWidget(delete)


class DayDialog(QDialog):
    """Form for one day plus the list of entries already on it."""

    field_changed = pyqtSignal(str, str)
    submit_requested = pyqtSignal()
    cancel_requested = pyqtSignal()
    edit_requested = pyqtSignal(str)
    delete_requested = pyqtSignal(str)
    closed = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumWidth(460)
        layout = QVBoxLayout(self)
        layout.setSpacing(10)

        form = QFormLayout()
        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("Meeting, task, event…")
        form.addRow("Title *", self.title_input)

        self.date_input = QLineEdit()
        self.date_input.setPlaceholderText("YYYY-MM-DD")
        form.addRow("Date *", self.date_input)

        self.time_input = QLineEdit()
        self.time_input.setPlaceholderText("HH:MM (optional)")
        form.addRow("Time", self.time_input)

        self.notes_input = QPlainTextEdit()
        self.notes_input.setPlaceholderText("Optional details")
        self.notes_input.setFixedHeight(64)
        form.addRow("Notes", self.notes_input)
        layout.addLayout(form)

        self.title_input.textEdited.connect(lambda value: self.field_changed.emit("title", value))
        self.date_input.textEdited.connect(lambda value: self.field_changed.emit("date", value))
        self.time_input.textEdited.connect(lambda value: self.field_changed.emit("time", value))
        self.notes_input.textChanged.connect(
            lambda: self.field_changed.emit("notes", self.notes_input.toPlainText())
        )
        self.title_input.returnPressed.connect(self.submit_requested)

        actions = QHBoxLayout()
        self.submit_button = QPushButton("Add schedule")
        self.submit_button.clicked.connect(self.submit_requested)
        actions.addWidget(self.submit_button)
        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.setObjectName("ghostButton")
        self.cancel_button.clicked.connect(self.cancel_requested)
        actions.addWidget(self.cancel_button)
        actions.addStretch(1)
        layout.addLayout(actions)

        layout.addWidget(QLabel("<b>On this day</b>"))
        self.empty_label = QLabel("No schedules yet. Add one above.")
        self.empty_label.setObjectName("subtitle")
        layout.addWidget(self.empty_label)
        self.entry_list = QListWidget()
        layout.addWidget(self.entry_list, stretch=1)
        self._shown: tuple[ScheduleEntry, ...] | None = None

    def render(self, state: ViewState, entries: Iterable[ScheduleEntry]) -> None:
        self.setWindowTitle(f"Schedule for {state.selected_date or ''}")
        form = state.form
        for widget, value in (
            (self.title_input, form.title),
            (self.date_input, form.date),
            (self.time_input, form.time),
        ):
            if widget.text() != value:
                widget.setText(value)
        if self.notes_input.toPlainText() != form.notes:
            self.notes_input.blockSignals(True)
            self.notes_input.setPlainText(form.notes)
            self.notes_input.blockSignals(False)

        self.submit_button.setText("Save changes" if state.is_editing else "Add schedule")
        self.cancel_button.setVisible(state.is_editing)

        shown = tuple(entries)
        if shown == self._shown:
            return
        self._shown = shown
        self.entry_list.clear()
        for entry in shown:
            row = _EntryRow(entry, self)
            item = QListWidgetItem()
            item.setSizeHint(row.sizeHint())
            self.entry_list.addItem(item)
            self.entry_list.setItemWidget(item, row)
        self.empty_label.setVisible(not shown)

    def reject(self) -> None:
        self.closed.emit()
        super().reject()
