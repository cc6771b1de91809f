from __future__ import annotations

from typing import Any, Dict

from ..core import DropOutcome
from ..domain import CalendarEvent
from ..services import MonthLayout
from .models import DayCellPayload, DropOutcomePayload, EventPayload, MonthLayoutPayload, WeekPayload, WeekSpanPayload


def serialize_event(event: CalendarEvent) -> Dict[str, Any]:
    return EventPayload.from_domain(event).model_dump(by_alias=True)


def serialize_outcome(outcome: DropOutcome) -> Dict[str, Any]:
    return DropOutcomePayload.from_domain(outcome).model_dump()


def serialize_month_layout(layout: MonthLayout, *, cell_limit: int, inset: float) -> Dict[str, Any]:
    cells = {cell.day: cell for cell in layout.grid.cells()}
    weeks = []
    for week in layout.weeks:
        days = []
        for day in week.days:
            truncated = layout.cell(day, cell_limit)
            days.append(DayCellPayload.from_domain(cells[day], list(truncated.visible), truncated.hidden_count))
        weeks.append(
            WeekPayload(
                days=days,
                spans=[WeekSpanPayload.from_domain(span, inset=inset) for span in week.spans],
                rows=week.rows,
            )
        )
    payload = MonthLayoutPayload(
        month=layout.grid.month,
        year=layout.grid.year,
        weeks=weeks,
        pointer_fraction=layout.pointer_fraction,
    )
    return payload.model_dump(by_alias=True)
