from __future__ import annotations


class ScheduleAppError(Exception):
    """Base class for errors surfaced to the user."""


class EntryValidationError(ScheduleAppError, ValueError):
    """Raised when an entry is missing its title or date."""


class EntryStoreError(ScheduleAppError):
    """Raised when the hosted store rejects or fails a request."""


class EntryNotFoundError(EntryStoreError):
    """Raised when an entry does not exist or is not owned by the caller."""


class AuthenticationError(ScheduleAppError):
    """Raised when sign-in or sign-up fails. The message is shown verbatim."""


class BackendNotConfiguredError(ScheduleAppError, RuntimeError):
    """Raised when accessing Supabase before the connection settings are provided."""


class SessionMissingError(ScheduleAppError, RuntimeError):
    """Raised when a session-specific action is attempted without a signed-in user."""
