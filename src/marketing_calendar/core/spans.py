from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence

from ..domain import CalendarEvent
from .bucketing import sort_key
from .interval import effective_end, layout_end

COLUMNS = 7
DEFAULT_BAR_INSET = 0.005


@dataclass(frozen=True)
class BarGeometry:
    """Horizontal placement as fractions of the week row width."""

    left: float
    width: float


@dataclass(frozen=True)
class WeekSpan:
    event: CalendarEvent
    start_column: int
    end_column: int
    starts_in_week: bool
    ends_in_week: bool
    stack_row: int
    is_preview: bool = False

    @property
    def column_count(self) -> int:
        return self.end_column - self.start_column + 1

    def geometry(self, inset: float = DEFAULT_BAR_INSET) -> BarGeometry:
        left = self.start_column / COLUMNS + inset
        width = self.column_count / COLUMNS - 2 * inset
        return BarGeometry(left=left, width=max(width, 0.0))


def merge_preview(events: Sequence[CalendarEvent], preview: Optional[CalendarEvent]) -> List[CalendarEvent]:
    """Swap the preview in for the event it shadows so the static bar is never drawn twice."""

    merged = list(events)
    if preview is None:
        return merged
    for index, event in enumerate(merged):
        if event.id == preview.id:
            merged[index] = preview
            return merged
    merged.append(preview)
    return sorted(merged, key=sort_key)


def project_week(
    week: Sequence[date],
    events: Iterable[CalendarEvent],
    *,
    preview: Optional[CalendarEvent] = None,
) -> List[WeekSpan]:
    """Place multi-day ``events`` (already sorted) on a 7-day ``week``."""

    if len(week) != COLUMNS:
        raise ValueError(f"week must contain {COLUMNS} days, got {len(week)}")
    week_start, week_end = week[0], week[-1]
    preview_id = preview.id if preview is not None else None

    spans: list[WeekSpan] = []
    for event in merge_preview(list(events), preview):
        is_preview = event.id == preview_id
        # A preview may legitimately collapse to a single day.
        end = effective_end(event) if is_preview else layout_end(event)
        start = event.start_date
        if max(start, week_start) > min(end, week_end):
            continue
        start_column = max((start - week_start).days, 0)
        end_column = min((end - week_start).days, COLUMNS - 1)
        spans.append(
            WeekSpan(
                event=event,
                start_column=start_column,
                end_column=end_column,
                starts_in_week=week_start <= start <= week_end,
                ends_in_week=week_start <= end <= week_end,
                stack_row=len(spans),
                is_preview=is_preview,
            )
        )
    return spans


def project_weeks(
    weeks: Iterable[Sequence[date]],
    events: Sequence[CalendarEvent],
    *,
    preview: Optional[CalendarEvent] = None,
) -> List[List[WeekSpan]]:
    return [project_week(week, events, preview=preview) for week in weeks]


def row_count(spans: Sequence[WeekSpan]) -> int:
    return max((span.stack_row for span in spans), default=-1) + 1
