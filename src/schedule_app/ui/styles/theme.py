from __future__ import annotations

from PyQt6.QtGui import QColor, QPalette
from PyQt6.QtWidgets import QApplication

from ...config import AppPalette


def apply_palette(app: QApplication, palette: AppPalette) -> None:
    qt_palette = QPalette()
    roles = {
        QPalette.ColorRole.Window: palette.background_primary,
        QPalette.ColorRole.Base: palette.background_secondary,
        QPalette.ColorRole.AlternateBase: palette.surface,
        QPalette.ColorRole.Text: palette.text_primary,
        QPalette.ColorRole.WindowText: palette.text_primary,
        QPalette.ColorRole.PlaceholderText: palette.text_secondary,
        QPalette.ColorRole.Highlight: palette.accent_primary,
        QPalette.ColorRole.HighlightedText: palette.background_secondary,
    }
    for role, color in roles.items():
        qt_palette.setColor(role, QColor(color))
    app.setPalette(qt_palette)
    app.setStyleSheet(palette.as_stylesheet())
