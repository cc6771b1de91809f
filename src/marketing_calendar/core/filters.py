from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Dict, Iterable, List, Mapping, Optional

from ..domain import CalendarEvent, EventCategory


@dataclass(frozen=True)
class FilterState:
    key_dates: bool = True
    school: bool = True
    seasons: bool = True
    brand_dates: bool = True
    campaign_flights: bool = True
    deadlines: bool = True

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, bool]) -> "FilterState":
        known = {item.name for item in fields(cls)}
        return cls(**{key: bool(value) for key, value in mapping.items() if key in known})

    def to_mapping(self) -> Dict[str, bool]:
        return asdict(self)

    def toggle(self, name: str) -> "FilterState":
        values = self.to_mapping()
        if name not in values:
            raise KeyError(f"Unknown filter toggle: {name}")
        values[name] = not values[name]
        return FilterState(**values)


CATEGORY_TOGGLES: Dict[EventCategory, str] = {
    EventCategory.PUBLIC_HOLIDAY: "key_dates",
    EventCategory.CULTURE: "key_dates",
    EventCategory.SCHOOL_TERM: "school",
    EventCategory.BACK_TO_SCHOOL: "school",
    EventCategory.SEASON: "seasons",
    EventCategory.BRAND_MOMENT: "brand_dates",
    EventCategory.CAMPAIGN_FLIGHT: "campaign_flights",
    EventCategory.DEADLINE: "deadlines",
}


def passes_filters(event: CalendarEvent, filters: FilterState) -> bool:
    toggle = CATEGORY_TOGGLES.get(event.category)
    if toggle is None:
        return True
    return getattr(filters, toggle)


def filter_events(events: Iterable[CalendarEvent], filters: FilterState) -> List[CalendarEvent]:
    return [event for event in events if passes_filters(event, filters)]


def matches_query(event: CalendarEvent, query: str) -> bool:
    if not query.strip():
        return True
    needle = query.lower()
    if needle in event.title.lower():
        return True
    if any(needle in tag.lower() for tag in event.tags):
        return True
    return needle in event.notes.lower()


def search_events(events: Iterable[CalendarEvent], query: Optional[str]) -> List[CalendarEvent]:
    if not query or not query.strip():
        return list(events)
    return [event for event in events if matches_query(event, query)]


def project_events(
    events: Iterable[CalendarEvent],
    filters: FilterState,
    query: Optional[str] = None,
) -> List[CalendarEvent]:
    return search_events(filter_events(events, filters), query)
