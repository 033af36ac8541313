from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from ..domain import AuthenticationError, UserAccount
from .context import ServiceContext

logger = logging.getLogger(__name__)

AuthListener = Callable[[Optional[UserAccount]], None]


@dataclass(slots=True)
class AuthService:
    context: ServiceContext
    _listeners: List[AuthListener] = field(default_factory=list, init=False)
    _lock: Any = field(default_factory=threading.Lock, init=False)

    def _client(self):
        return self.context.gateway.ensure_client()

    @staticmethod
    def _require_credentials(email: str, password: str) -> tuple[str, str]:
        email = (email or "").strip()
        if not email or not password:
            raise AuthenticationError("Provide both email and password.")
        return email, password

    def current_user(self) -> Optional[UserAccount]:
        if not self.context.gateway.has_session():
            return None
        return UserAccount.from_user(getattr(self.context.gateway.session(), "user", None))

    def _start_session(self, session: Any) -> Optional[UserAccount]:
        self.context.gateway.set_session(session)
        user = self.current_user()
        logger.info("Signed in as %s", user.email if user else "unknown user")
        self._notify(user)
        return user

    def sign_in(self, email: str, password: str) -> UserAccount:
        email, password = self._require_credentials(email, password)
        client = self._client()
        try:
            response = client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as exc:  # noqa: BLE001
            logger.warning("Sign-in failed for %s: %s", email, exc)
            raise AuthenticationError(str(exc) or "Authentication failed. Please try again.") from exc
        session = getattr(response, "session", None)
        if session is None:
            raise AuthenticationError("Check your email for a verification link to finish sign-in.")
        user = self._start_session(session)
        if user is None:
            raise AuthenticationError("Supabase returned a session without a user.")
        return user

    def sign_up(self, email: str, password: str) -> Optional[UserAccount]:
        """Create an account; returns ``None`` while email confirmation is pending."""

        email, password = self._require_credentials(email, password)
        client = self._client()
        try:
            response = client.auth.sign_up({"email": email, "password": password})
        except Exception as exc:  # noqa: BLE001
            logger.warning("Sign-up failed for %s: %s", email, exc)
            raise AuthenticationError(str(exc) or "Sign-up failed. Please try again.") from exc
        session = getattr(response, "session", None)
        if session is None:
            logger.info("Account created for %s; awaiting email confirmation", email)
            return None
        return self._start_session(session)

    def sign_out(self) -> None:
        if not self.context.gateway.has_session():
            return
        try:
            client = self._client()
            try:
                client.auth.sign_out()
            except Exception as exc:  # noqa: BLE001
                raise AuthenticationError(str(exc) or "Sign-out failed.") from exc
        finally:
            self.context.gateway.clear_session()
            logger.info("Signed out")
            self._notify(None)

    def on_auth_state_change(self, callback: AuthListener) -> Callable[[], None]:
        """Call ``callback`` with the current user now and after every change."""

        with self._lock:
            self._listeners.append(callback)
        callback(self.current_user())

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return unsubscribe

    def _notify(self, user: Optional[UserAccount]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(user)
