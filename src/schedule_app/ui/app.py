from __future__ import annotations

import logging
import sys
from typing import Callable, Optional

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtWidgets import QApplication

from ..api import ApiState, api_state
from ..bootstrap import configure_logging
from ..config import AppPalette, AppSettings, get_settings
from ..domain import UserAccount
from ..utils.qt import TaskRunner
from .login import LoginDialog
from .main_window import MainWindow
from .styles.theme import apply_palette

logger = logging.getLogger(__name__)


class AppShell(QObject):
    """Swaps between the login dialog and the main window as the session changes."""

    auth_changed = pyqtSignal(object)

    def __init__(self, app: QApplication, *, api_state: ApiState, settings: AppSettings) -> None:
        super().__init__()
        self.app = app
        self.api_state = api_state
        self.settings = settings
        self.runner = TaskRunner()
        self.window: Optional[MainWindow] = None
        self.login: Optional[LoginDialog] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self.auth_changed.connect(self._on_auth_changed)

    def start(self) -> None:
        self._unsubscribe = self.api_state.auth.on_auth_state_change(self.auth_changed.emit)

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self.window is not None:
            self.window.teardown()

    def _on_auth_changed(self, user: Optional[UserAccount]) -> None:
        if user is None:
            self._show_login()
        else:
            self._show_window(user)

    def _show_login(self) -> None:
        if self.window is not None:
            self.window.teardown()
            self.window.hide()
            self.window.deleteLater()
            self.window = None
        if self.login is not None:
            return
        self.login = LoginDialog(
            auth_service=self.api_state.auth,
            supabase_settings=self.settings.supabase,
            app_name=self.settings.ui.app_name,
        )
        self.login.rejected.connect(self.app.quit)
        self.login.open()

    def _show_window(self, user: UserAccount) -> None:
        if self.login is not None:
            self.login.rejected.disconnect(self.app.quit)
            self.login.hide()
            self.login.deleteLater()
            self.login = None
        if self.window is not None:
            if self.window.state.user == user:
                return
            self.window.teardown()
            self.window.deleteLater()
        self.window = MainWindow(api_state=self.api_state, settings=self.settings, user=user)
        self.window.logout_requested.connect(self._logout)
        self.window.show()

    def _logout(self) -> None:
        if self.window is not None:
            self.window.teardown()
        self.runner.submit(self.api_state.auth.sign_out, on_error=self._logout_failed)

    def _logout_failed(self, exc: Exception) -> None:
        logger.error("Logout error: %s", exc)


def run_gui() -> None:
    configure_logging()
    settings = get_settings()
    if not settings.supabase.is_configured:
        logger.warning(
            "Supabase is not configured. Fill %s in the environment or .env",
            ", ".join(settings.supabase.missing_env_vars),
        )
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(settings.ui.app_name)
    app.setOrganizationName(settings.ui.organization)
    apply_palette(app, AppPalette())

    shell = AppShell(app, api_state=api_state, settings=settings)
    shell.start()
    exit_code = app.exec()
    shell.stop()
    sys.exit(exit_code)
