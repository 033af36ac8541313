from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from supabase import Client, create_client

from ..config.settings import SupabaseSettings
from ..domain.errors import BackendNotConfiguredError, SessionMissingError

logger = logging.getLogger(__name__)


@dataclass
class SupabaseGateway:
    """Thin wrapper around the Supabase Python client with session awareness."""

    settings: SupabaseSettings
    _client: Optional[Client] = None
    _session: Optional[Any] = None

    def ensure_client(self) -> Client:
        if self._client is not None:
            return self._client
        if not self.settings.is_configured:
            missing = ", ".join(self.settings.missing_env_vars)
            raise BackendNotConfiguredError(f"Supabase settings are missing: {missing}.")
        self._client = create_client(self.settings.url, self.settings.anon_key)
        logger.debug("Supabase client created for %s", self.settings.url)
        return self._client

    def use_client(self, client: Client) -> None:
        """Install an already-built client, e.g. one shared with another process."""

        self._client = client

    def set_session(self, session: Any) -> None:
        self._session = session

    def clear_session(self) -> None:
        self._session = None

    def session(self) -> Any:
        if self._session is None:
            raise SessionMissingError("You are not signed in.")
        return self._session

    def current_user(self) -> Any:
        user = getattr(self.session(), "user", None)
        if user is None:
            raise SessionMissingError("Supabase session has no user.")
        return user

    def current_user_id(self) -> str:
        identifier = getattr(self.current_user(), "id", None)
        if not identifier:
            raise SessionMissingError("Supabase session has no user id.")
        return str(identifier)

    def has_session(self) -> bool:
        return self._session is not None

    def table(self, name: str):
        return self.ensure_client().table(name)
