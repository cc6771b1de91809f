"""Marketing calendar layout engine."""

from __future__ import annotations

from .domain import CalendarEvent, EventCategory
from .services import CalendarService, ServiceContext

__all__ = ["CalendarEvent", "CalendarService", "EventCategory", "ServiceContext"]
