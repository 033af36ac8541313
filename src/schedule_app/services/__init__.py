"""Application services orchestrating data access and domain logic."""

from __future__ import annotations

from .auth import AuthService
from .context import ServiceContext
from .schedule import ScheduleService

__all__ = ["AuthService", "ScheduleService", "ServiceContext"]
