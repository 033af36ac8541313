from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AppPalette:
    background_primary: str = "#f8fafc"
    background_secondary: str = "#ffffff"
    surface: str = "#f1f5f9"
    surface_alt: str = "#e2e8f0"
    accent_primary: str = "#2563eb"
    accent_secondary: str = "#f59e0b"
    accent_error: str = "#dc2626"
    text_primary: str = "#0f172a"
    text_secondary: str = "#64748b"
    border_subtle: str = "#e2e8f0"
    border_strong: str = "#cbd5e1"

    def as_stylesheet(self) -> str:
        """Global stylesheet for the schedule window and dialogs."""

        return f"""
        QWidget {{
            background-color: {self.background_primary};
            color: {self.text_primary};
            font-family: 'Helvetica Neue', 'Segoe UI', Arial, sans-serif;
            font-size: 14px;
        }}
        QPushButton {{
            background-color: {self.accent_primary};
            color: #ffffff;
            border: none;
            padding: 8px 14px;
            border-radius: 8px;
            font-weight: 600;
        }}
        QPushButton:disabled {{
            background-color: {self.border_subtle};
            color: {self.text_secondary};
        }}
        QPushButton#ghostButton {{
            background-color: transparent;
            color: {self.accent_primary};
            border: 1px solid {self.border_strong};
        }}
        QPushButton#dangerButton {{
            background-color: {self.accent_error};
        }}
        QPushButton#tabButton:checked {{
            background-color: {self.accent_primary};
            color: #ffffff;
        }}
        QPushButton#tabButton:!checked {{
            background-color: transparent;
            color: {self.text_secondary};
        }}
        QLineEdit, QTextEdit, QPlainTextEdit, QDateEdit, QTimeEdit {{
            background-color: {self.background_secondary};
            color: {self.text_primary};
            border: 1px solid {self.border_strong};
            border-radius: 6px;
            padding: 6px 8px;
        }}
        QLineEdit:focus, QPlainTextEdit:focus {{
            border-color: {self.accent_primary};
        }}
        QLabel#title {{
            font-size: 20px;
            font-weight: 700;
        }}
        QLabel#subtitle {{
            color: {self.text_secondary};
        }}
        QLabel#badge {{
            background-color: {self.accent_primary};
            color: #ffffff;
            border-radius: 9px;
            padding: 2px 8px;
            font-weight: 700;
        }}
        QLabel#loginError {{
            color: {self.accent_error};
        }}
        QLabel#weekday {{
            color: {self.text_secondary};
            font-weight: 600;
        }}
        QToolButton#dayCell {{
            background-color: {self.background_secondary};
            border: 1px solid {self.border_subtle};
            border-radius: 6px;
            padding: 4px;
            text-align: left;
        }}
        QToolButton#dayCell[otherMonth="true"] {{
            color: {self.text_secondary};
            background-color: {self.surface};
        }}
        QToolButton#dayCell[today="true"] {{
            border: 2px solid {self.accent_secondary};
        }}
        QToolButton#dayCell[selected="true"] {{
            border: 2px solid {self.accent_primary};
        }}
        QWidget#sidebarPanel {{
            background-color: {self.surface};
            border-right: 1px solid {self.border_strong};
        }}
        QListView {{
            background-color: {self.background_secondary};
            border: 1px solid {self.border_strong};
            selection-background-color: rgba(37, 99, 235, 0.15);
            selection-color: {self.text_primary};
        }}
        """
