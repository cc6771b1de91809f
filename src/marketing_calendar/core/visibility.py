from __future__ import annotations

from typing import AbstractSet, Iterable, List, Optional

from ..domain import CalendarEvent


def events_for_brand(
    events: Iterable[CalendarEvent],
    brand_id: Optional[str],
    hidden_ids: AbstractSet[str] = frozenset(),
) -> List[CalendarEvent]:
    """Events of ``brand_id`` plus global events the brand has not hidden."""

    visible: list[CalendarEvent] = []
    for event in events:
        if event.is_global:
            if event.id not in hidden_ids:
                visible.append(event)
        elif event.owner_id == brand_id:
            visible.append(event)
    return visible
