from __future__ import annotations

from typing import Dict, List, Sequence

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QGridLayout, QHBoxLayout, QLabel, QPushButton, QSizePolicy, QToolButton, QVBoxLayout, QWidget

from ...domain import DayCell, ScheduleEntry, ViewMonth, month_title
from ...domain.calendar import GRID_CELLS, WEEKDAYS, cell_preview


class MonthGrid(QWidget):
    day_clicked = pyqtSignal(str)
    previous_requested = pyqtSignal()
    next_requested = pyqtSignal()
    today_requested = pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        self.setObjectName("calendarPanel")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        header = QHBoxLayout()
        previous = QPushButton("←")
        previous.setObjectName("ghostButton")
        previous.setToolTip("Previous month")
        previous.clicked.connect(self.previous_requested)
        header.addWidget(previous)

        self.title_label = QLabel("")
        self.title_label.setObjectName("title")
        self.title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        header.addWidget(self.title_label, stretch=1)

        following = QPushButton("→")
        following.setObjectName("ghostButton")
        following.setToolTip("Next month")
        following.clicked.connect(self.next_requested)
        header.addWidget(following)

        today = QPushButton("Today")
        today.clicked.connect(self.today_requested)
        header.addWidget(today)
        layout.addLayout(header)

        grid = QGridLayout()
        grid.setSpacing(4)
        for column, name in enumerate(WEEKDAYS):
            label = QLabel(name)
            label.setObjectName("weekday")
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            grid.addWidget(label, 0, column)

        self._buttons: List[QToolButton] = []
        for index in range(GRID_CELLS):
            button = QToolButton()
            button.setObjectName("dayCell")
            button.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextOnly)
            button.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
            button.setMinimumSize(96, 72)
            button.clicked.connect(lambda _checked=False, position=index: self._emit_day(position))
            grid.addWidget(button, 1 + index // 7, index % 7)
            self._buttons.append(button)
        layout.addLayout(grid, stretch=1)

        self._cells: Sequence[DayCell] = ()

    def render(self, view: ViewMonth, cells: Sequence[DayCell], buckets: Dict[str, List[ScheduleEntry]]) -> None:
        self.title_label.setText(month_title(view))
        self._cells = cells
        for button, cell in zip(self._buttons, cells):
            titles, hidden = cell_preview(buckets.get(cell.key, []))
            lines = [str(cell.day), *titles]
            if hidden:
                lines.append(f"+{hidden}")
            button.setText("\n".join(lines))
            button.setToolTip("\n".join(entry.title for entry in buckets.get(cell.key, [])))
            button.setProperty("otherMonth", not cell.in_month)
            button.setProperty("today", cell.is_today)
            button.setProperty("selected", cell.is_selected)
            # Re-polish so property selectors in the stylesheet apply.
            button.style().unpolish(button)
            button.style().polish(button)

    def _emit_day(self, position: int) -> None:
        if position < len(self._cells):
            self.day_clicked.emit(self._cells[position].key)
