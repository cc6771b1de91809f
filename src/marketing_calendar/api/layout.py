from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from ..core import DragMode, FilterState, build_month_grid, calculate_campaign_dates, find_planning_prompt
from ..core.grid import WEEKDAY_LABELS, quarter_of
from ..domain import CalendarEvent, EventCategory
from .models import PlanningPromptPayload
from .registry import register_api
from .serializers import serialize_event, serialize_month_layout, serialize_outcome
from .state import api_state


def _filters(filters: Optional[Dict[str, bool]]) -> Optional[FilterState]:
    return FilterState.from_mapping(filters) if filters else None


def _find_event(event_id: str, year: int) -> CalendarEvent:
    for event in api_state.calendar.year_view(year).events:
        if event.id == event_id:
            return event
    raise ValueError(f"Event {event_id} not found in {year}.")


@register_api(
    "materialize_year",
    description="Return the visible events for a year with recurring events materialized, filtered and searched.",
    category="layout",
    tags=("year", "recurrence"),
)
def materialize_year(year: int, query: str = "", filters: Optional[Dict[str, bool]] = None) -> Dict[str, object]:
    view = api_state.calendar.year_view(year, _filters(filters), query)
    return {"year": year, "events": [serialize_event(event) for event in view.events]}


@register_api(
    "month_grid",
    description="Return the Monday-first 6x7 day grid for a month (0-11).",
    category="layout",
    tags=("month", "grid"),
)
def month_grid(month: int, year: int) -> Dict[str, List]:
    grid = build_month_grid(month, year)
    return {
        "labels": list(WEEKDAY_LABELS),
        "days": [day.isoformat() for day in grid.days],
        "weeks": [[day.isoformat() for day in week] for week in grid.weeks],
    }


@register_api(
    "month_layout",
    description="Return day cells and multi-day bar placement for every week of a month view.",
    category="layout",
    tags=("month", "spans"),
)
def month_layout(
    month: int,
    year: int,
    query: str = "",
    filters: Optional[Dict[str, bool]] = None,
) -> Dict[str, object]:
    calendar = api_state.calendar
    layout_settings = calendar.context.settings.layout
    layout = calendar.month_layout(month, year, _filters(filters), query)
    return serialize_month_layout(
        layout,
        cell_limit=layout_settings.cell_display_limit,
        inset=layout_settings.bar_inset,
    )


@register_api(
    "month_summaries",
    description="Return per-month event counts with truncated single-day and range lists for the year grid.",
    category="layout",
    tags=("year", "months"),
)
def month_summaries(year: int, query: str = "") -> Dict[str, List[dict]]:
    cards = api_state.calendar.month_cards(year, query=query)
    return {
        "months": [
            {
                "month": card.month,
                "name": card.name,
                "quarter": quarter_of(card.month),
                "note": card.note,
                "total": card.total,
                "events": [serialize_event(event) for event in card.single_day.visible],
                "hidden_count": card.single_day.hidden_count,
                "ranges": [serialize_event(event) for event in card.ranges.visible],
                "hidden_ranges": card.ranges.hidden_count,
            }
            for card in cards
        ]
    }


@register_api(
    "set_month_note",
    description="Save the planning note shown on a month card (0-11) for the current brand; empty clears it.",
    category="layout",
    tags=("months", "notes"),
)
def set_month_note(year: int, month: int, note: str) -> Dict[str, object]:
    if not 0 <= month <= 11:
        raise ValueError(f"month must be between 0 and 11, got {month}")
    api_state.calendar.set_month_note(year, month, note)
    return {"year": year, "month": month, "note": note}


@register_api(
    "drop_event",
    description="Move (mode=move) or resize (mode=extend) an event by dropping it on a day.",
    category="drag",
    tags=("drag", "mutation"),
)
def drop_event(event_id: str, mode: DragMode, drop_day: date, year: int) -> Dict[str, object]:
    calendar = api_state.calendar
    event = _find_event(event_id, year)
    started = calendar.start_move(event) if mode is DragMode.MOVE else calendar.start_extend(event)
    if not started:
        return {"accepted": False, "changed": False, "reason": "not_draggable"}
    return serialize_outcome(calendar.drop(drop_day))


@register_api(
    "planning_prompt_for_event",
    description="Return campaign planning guidance and lead-time dates for an anchor event.",
    category="planning",
    tags=("planning", "campaign"),
)
def planning_prompt_for_event(category: EventCategory, title: str, day: date) -> Dict[str, object]:
    prompt = find_planning_prompt(category, title)
    if prompt is None:
        return {"prompt": None, "dates": None}
    return {
        "prompt": PlanningPromptPayload.from_domain(prompt).model_dump(),
        "dates": calculate_campaign_dates(day, prompt).to_dict(),
    }
