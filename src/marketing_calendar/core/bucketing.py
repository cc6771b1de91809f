from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Sequence, Tuple

from ..domain import CATEGORY_PRIORITY, CalendarEvent
from .interval import intersects_month, is_multi_day


def sort_key(event: CalendarEvent) -> Tuple[int, str]:
    return CATEGORY_PRIORITY[event.category], event.start_date.isoformat()


def sort_events(events: Iterable[CalendarEvent]) -> List[CalendarEvent]:
    return sorted(events, key=sort_key)


@dataclass
class EventBuckets:
    single_day: Dict[str, List[CalendarEvent]] = field(default_factory=dict)
    multi_day: List[CalendarEvent] = field(default_factory=list)

    def for_day(self, day: date) -> List[CalendarEvent]:
        return self.single_day.get(day.isoformat(), [])

    @property
    def single_day_count(self) -> int:
        return sum(len(items) for items in self.single_day.values())


def partition_events(events: Iterable[CalendarEvent]) -> EventBuckets:
    buckets = EventBuckets()
    for event in events:
        if is_multi_day(event):
            buckets.multi_day.append(event)
        else:
            buckets.single_day.setdefault(event.start_date.isoformat(), []).append(event)
    return buckets


@dataclass(frozen=True)
class Truncated:
    visible: Tuple[CalendarEvent, ...]
    hidden_count: int


def truncate(events: Sequence[CalendarEvent], limit: int) -> Truncated:
    """Split into the first ``limit`` events and a "+K more" count."""

    limit = max(limit, 0)
    return Truncated(visible=tuple(events[:limit]), hidden_count=max(len(events) - limit, 0))


def group_by_month(events: Iterable[CalendarEvent], year: int) -> Dict[int, List[CalendarEvent]]:
    items = list(events)
    return {month: sort_events(event for event in items if intersects_month(event, year, month)) for month in range(12)}
