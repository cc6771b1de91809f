from __future__ import annotations

import calendar
from datetime import date
from typing import Optional

from ..domain import MULTI_DAY_CATEGORIES, CalendarEvent, EventCategory


def supports_multi_day(category: EventCategory) -> bool:
    return category in MULTI_DAY_CATEGORIES


def effective_end(event: CalendarEvent) -> date:
    """Last occupied day; an end before the start is treated as a single day."""

    end = event.end_date
    if end is None or end < event.start_date:
        return event.start_date
    return end


def is_multi_day(event: CalendarEvent) -> bool:
    if not supports_multi_day(event.category):
        return False
    return effective_end(event) != event.start_date


def layout_end(event: CalendarEvent) -> date:
    """End used for placement: stray end dates on single-day categories are ignored."""

    return effective_end(event) if is_multi_day(event) else event.start_date


def span_overlaps_range(event: CalendarEvent, range_start: date, range_end: date) -> bool:
    return max(event.start_date, range_start) <= min(layout_end(event), range_end)


def duration_days(event: CalendarEvent) -> int:
    return (effective_end(event) - event.start_date).days


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of ``month`` (0-11)."""

    last_day = calendar.monthrange(year, month + 1)[1]
    return date(year, month + 1, 1), date(year, month + 1, last_day)


def intersects_month(event: CalendarEvent, year: int, month: int) -> bool:
    first, last = month_bounds(year, month)
    return span_overlaps_range(event, first, last)


def format_date_range(start: date, end: Optional[date] = None) -> str:
    if end is None or end == start:
        return f"{start:%b} {start.day}, {start.year}"
    if start.year == end.year:
        if start.month == end.month:
            return f"{start:%b} {start.day} - {end.day}, {end.year}"
        return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"
    return f"{start:%b} {start.day}, {start.year} - {end:%b} {end.day}, {end.year}"
