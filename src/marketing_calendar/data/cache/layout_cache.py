from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Optional, Tuple

from ...core.filters import FilterState

LayoutKey = Tuple[Optional[str], int, FilterState, str, int]


def layout_key(
    *,
    brand_id: Optional[str],
    year: int,
    filters: FilterState,
    query: Optional[str],
    revision: int,
) -> LayoutKey:
    text = query or ""
    return (brand_id, year, filters, text.lower() if text.strip() else "", revision)


@dataclass
class LayoutCache:
    """Bounded LRU of processed calendar views keyed by their inputs."""

    max_entries: int
    entries: "OrderedDict[Hashable, Any]" = field(default_factory=OrderedDict)
    hits: int = 0
    misses: int = 0

    def get(self, key: Hashable) -> Any:
        if key not in self.entries:
            return None
        self.entries.move_to_end(key)
        return self.entries[key]

    def put(self, key: Hashable, value: Any) -> None:
        self.entries[key] = value
        self.entries.move_to_end(key)
        while len(self.entries) > max(self.max_entries, 1):
            self.entries.popitem(last=False)

    def get_or_compute(self, key: Hashable, factory: Callable[[], Any]) -> Any:
        if key in self.entries:
            self.hits += 1
            self.entries.move_to_end(key)
            return self.entries[key]
        self.misses += 1
        value = factory()
        self.put(key, value)
        return value

    def clear(self) -> None:
        self.entries.clear()
