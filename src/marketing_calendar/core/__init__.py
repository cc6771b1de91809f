"""Calendar layout engine: materialization, grids, week spans, drag resolution, and storage."""

from .bucketing import EventBuckets, group_by_month, partition_events, sort_events, truncate
from .config import APP_NAME, DATA_DIR, EVENTS_FILE
from .drag import (
    DateMutation,
    DragController,
    DragMode,
    DragState,
    DropOutcome,
    PointerRouting,
    RejectReason,
    WeekRect,
)
from .event_store import EventNotFoundError, EventStore, JsonEventStore, Removal
from .filters import FilterState, filter_events, project_events, search_events
from .grid import GRID_DAYS, GridDay, MonthGrid, build_month_grid
from .interval import duration_days, effective_end, is_multi_day, span_overlaps_range
from .planning import PlanningPrompt, calculate_campaign_dates, find_planning_prompt
from .recurrence import materialize_recurring_events, shift_to_year
from .spans import BarGeometry, WeekSpan, project_week, project_weeks
from .visibility import events_for_brand

__all__ = [
    "APP_NAME",
    "DATA_DIR",
    "EVENTS_FILE",
    "GRID_DAYS",
    "BarGeometry",
    "DateMutation",
    "DragController",
    "DragMode",
    "DragState",
    "DropOutcome",
    "EventBuckets",
    "EventNotFoundError",
    "EventStore",
    "FilterState",
    "GridDay",
    "JsonEventStore",
    "MonthGrid",
    "PlanningPrompt",
    "PointerRouting",
    "RejectReason",
    "Removal",
    "WeekRect",
    "WeekSpan",
    "build_month_grid",
    "calculate_campaign_dates",
    "duration_days",
    "effective_end",
    "events_for_brand",
    "filter_events",
    "find_planning_prompt",
    "group_by_month",
    "is_multi_day",
    "materialize_recurring_events",
    "partition_events",
    "project_events",
    "project_week",
    "project_weeks",
    "search_events",
    "shift_to_year",
    "sort_events",
    "span_overlaps_range",
    "truncate",
]
