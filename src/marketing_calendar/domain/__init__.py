"""Domain models for marketing calendar planning."""

from __future__ import annotations

from .enums import (
    CATEGORY_PRIORITY,
    MULTI_DAY_CATEGORIES,
    Channel,
    EventCategory,
    Importance,
    Objective,
    RecurrenceFrequency,
    Visibility,
)
from .models import CalendarEvent, EventLink, InvalidEventRecord, Recurrence, events_from_records

__all__ = [
    "CATEGORY_PRIORITY",
    "MULTI_DAY_CATEGORIES",
    "CalendarEvent",
    "Channel",
    "EventCategory",
    "EventLink",
    "Importance",
    "InvalidEventRecord",
    "Objective",
    "Recurrence",
    "RecurrenceFrequency",
    "Visibility",
    "events_from_records",
]
