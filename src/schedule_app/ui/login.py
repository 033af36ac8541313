from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QButtonGroup,
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from ..config.settings import SupabaseSettings
from ..services import AuthService
from ..utils.qt import TaskRunner

logger = logging.getLogger(__name__)

SIGN_IN = "sign_in"
SIGN_UP = "sign_up"


class LoginDialog(QDialog):
    """Email/password sign-in and sign-up against Supabase Auth."""

    def __init__(self, *, auth_service: AuthService, supabase_settings: SupabaseSettings, app_name: str) -> None:
        super().__init__()
        self.setObjectName("loginDialog")
        self.auth_service = auth_service
        self.supabase_settings = supabase_settings
        self.runner = TaskRunner()
        self._mode = SIGN_IN

        self.setWindowTitle(f"{app_name} - Sign in")
        self.setModal(True)
        self.setMinimumWidth(380)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(28, 28, 28, 24)
        layout.setSpacing(10)

        title = QLabel(f"{app_name} App")
        title.setObjectName("title")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        subtitle = QLabel("Sign in to manage your schedules")
        subtitle.setObjectName("subtitle")
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(subtitle)

        tabs = QHBoxLayout()
        self.tab_group = QButtonGroup(self)
        self.tab_group.setExclusive(True)
        for mode, label in ((SIGN_IN, "Sign In"), (SIGN_UP, "Sign Up")):
            button = QPushButton(label)
            button.setObjectName("tabButton")
            button.setCheckable(True)
            button.setChecked(mode == SIGN_IN)
            button.clicked.connect(lambda _checked, value=mode: self._set_mode(value))
            self.tab_group.addButton(button)
            tabs.addWidget(button)
        layout.addLayout(tabs)

        self.error_label = QLabel("")
        self.error_label.setObjectName("loginError")
        self.error_label.setWordWrap(True)
        self.error_label.hide()
        layout.addWidget(self.error_label)

        layout.addWidget(QLabel("Email"))
        self.email_input = QLineEdit()
        self.email_input.setPlaceholderText("your@email.com")
        layout.addWidget(self.email_input)

        layout.addWidget(QLabel("Password"))
        self.password_input = QLineEdit()
        self.password_input.setPlaceholderText("Enter password")
        self.password_input.setEchoMode(QLineEdit.EchoMode.Password)
        self.password_input.returnPressed.connect(self._submit)
        layout.addWidget(self.password_input)

        self.submit_button = QPushButton("Sign In")
        self.submit_button.clicked.connect(self._submit)
        layout.addWidget(self.submit_button)

        self._inputs = [self.email_input, self.password_input, self.submit_button, *self.tab_group.buttons()]

        if not self.supabase_settings.is_configured:
            missing = ", ".join(self.supabase_settings.missing_env_vars)
            self._show_message(f"Supabase credentials missing. Set {missing} to sign in.")

    # ------------------------------------------------------------------ helpers

    def _set_mode(self, mode: str) -> None:
        self._mode = mode
        self._set_mode_label()
        self._show_message("")

    def _show_message(self, message: str, *, is_error: bool = True) -> None:
        if not message:
            self.error_label.hide()
            return
        self.error_label.setStyleSheet("" if is_error else "color: #16a34a;")
        self.error_label.setText(message)
        self.error_label.show()

    def _set_busy(self, busy: bool) -> None:
        for widget in self._inputs:
            widget.setEnabled(not busy)
        if busy:
            self.submit_button.setText("Please wait...")
        else:
            self._set_mode_label()

    def _set_mode_label(self) -> None:
        self.submit_button.setText("Sign In" if self._mode == SIGN_IN else "Create Account")

    # ------------------------------------------------------------------ slots

    def _submit(self) -> None:
        email = self.email_input.text().strip()
        password = self.password_input.text()
        self._show_message("")
        self._set_busy(True)

        if self._mode == SIGN_IN:
            worker = self.auth_service.sign_in
        else:
            worker = self.auth_service.sign_up

        self.runner.submit(worker, email, password, on_success=self._finished, on_error=self._failed)

    def _finished(self, user: object) -> None:
        self._set_busy(False)
        self.password_input.clear()
        if user is None:
            self._set_mode(SIGN_IN)
            self.tab_group.buttons()[0].setChecked(True)
            self._show_message("Account created. Check your inbox to confirm your email, then sign in.", is_error=False)
            return
        self.email_input.clear()
        self.accept()

    def _failed(self, exc: Exception) -> None:
        logger.info("Authentication failed: %s", exc)
        self._set_busy(False)
        self._show_message(str(exc) or "Authentication failed. Please try again.")
