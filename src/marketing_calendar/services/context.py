from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..config import AppSettings, get_settings
from ..core import JsonEventStore
from ..data import LayoutCache


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share settings, the event store, and caches."""

    settings: AppSettings = field(default_factory=get_settings)
    store: Optional[JsonEventStore] = None
    brand_id: Optional[str] = None
    cache: LayoutCache = field(init=False)

    def __post_init__(self) -> None:
        if self.store is None:
            self.store = JsonEventStore(self.settings.storage.events_file)
        if self.brand_id is None:
            self.brand_id = self.settings.brand_id
        self.cache = LayoutCache(max_entries=self.settings.layout.cache_size)
