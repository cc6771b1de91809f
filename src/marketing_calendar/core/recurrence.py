from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Iterable, List, Optional

from ..domain import CalendarEvent

logger = logging.getLogger(__name__)


def shift_to_year(value: date, year: int) -> date:
    """Replace the year, clamping Feb 29 to Feb 28 when ``year`` is not a leap year."""

    try:
        return value.replace(year=year)
    except ValueError:
        return value.replace(year=year, day=28)


def shift_years(value: Optional[date], years: int) -> Optional[date]:
    if value is None:
        return None
    return shift_to_year(value, value.year + years)


def materialize_event(event: CalendarEvent, target_year: int) -> Optional[CalendarEvent]:
    """Concrete instance of ``event`` for ``target_year`` or ``None`` when it does not occur."""

    stored_year = event.start_date.year
    if not event.is_recurring:
        return event if stored_year == target_year else None
    if stored_year == target_year:
        return event
    delta = target_year - stored_year
    return replace(
        event,
        id=f"{event.id}-{target_year}",
        start_date=shift_to_year(event.start_date, target_year),
        end_date=shift_years(event.end_date, delta),
        source_id=event.id,
    )


def materialize_recurring_events(events: Iterable[CalendarEvent], target_year: int) -> List[CalendarEvent]:
    materialized: list[CalendarEvent] = []
    for event in events:
        instance = materialize_event(event, target_year)
        if instance is not None:
            materialized.append(instance)
    logger.debug("Materialized %d events for %d", len(materialized), target_year)
    return materialized
