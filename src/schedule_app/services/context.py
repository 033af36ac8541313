from __future__ import annotations

from dataclasses import dataclass, field

from ..config import AppSettings, get_settings
from ..data import SupabaseGateway
from ..data.repositories import EntryRepository


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share settings, gateway, and repositories."""

    settings: AppSettings = field(default_factory=get_settings)
    gateway: SupabaseGateway = field(init=False)
    entries: EntryRepository = field(init=False)

    def __post_init__(self) -> None:
        self.gateway = SupabaseGateway(self.settings.supabase)
        self.entries = EntryRepository(
            gateway=self.gateway,
            table_name=self.settings.storage.entries_table,
        )
