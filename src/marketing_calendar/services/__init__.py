"""Application services orchestrating the layout engine and the event store."""

from __future__ import annotations

from .calendar import CalendarService, MonthCard, MonthLayout, WeekLayout, YearView
from .context import ServiceContext

__all__ = ["CalendarService", "MonthCard", "MonthLayout", "ServiceContext", "WeekLayout", "YearView"]
