from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from ..core import (
    DragController,
    DragMode,
    DropOutcome,
    EventBuckets,
    FilterState,
    JsonEventStore,
    MonthGrid,
    Removal,
    WeekRect,
    WeekSpan,
    build_month_grid,
    events_for_brand,
    group_by_month,
    is_multi_day,
    materialize_recurring_events,
    partition_events,
    project_events,
    project_week,
    sort_events,
    span_overlaps_range,
    truncate,
)
from ..core.bucketing import Truncated
from ..core.drag import DateMutation, MonthRef
from ..core.grid import MONTH_NAMES_SHORT
from ..core.recurrence import shift_years
from ..core.spans import row_count
from ..data.cache import layout_key
from ..domain import CalendarEvent
from .context import ServiceContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YearView:
    year: int
    events: Tuple[CalendarEvent, ...]
    by_month: Dict[int, List[CalendarEvent]]


@dataclass(frozen=True)
class WeekLayout:
    days: Tuple[date, ...]
    spans: Tuple[WeekSpan, ...]

    @property
    def rows(self) -> int:
        return row_count(self.spans)


@dataclass(frozen=True)
class MonthLayout:
    grid: MonthGrid
    buckets: EventBuckets
    weeks: Tuple[WeekLayout, ...]
    preview: Optional[CalendarEvent] = None
    pointer_fraction: Optional[float] = None

    def cell(self, day: date, limit: int) -> Truncated:
        return truncate(self.buckets.for_day(day), limit)


@dataclass(frozen=True)
class MonthCard:
    month: int
    name: str
    single_day: Truncated
    ranges: Truncated
    total: int
    note: str = ""


@dataclass(slots=True)
class CalendarService:
    context: ServiceContext
    drag: DragController = field(init=False)

    def __post_init__(self) -> None:
        self.drag = DragController(brand_id=self.context.brand_id)

    @property
    def store(self) -> JsonEventStore:
        assert self.context.store is not None
        return self.context.store

    @property
    def brand_id(self) -> Optional[str]:
        return self.context.brand_id

    def select_brand(self, brand_id: Optional[str]) -> None:
        self.drag.cancel()
        self.context.brand_id = brand_id
        self.drag.brand_id = brand_id

    def _filters(self, filters: Optional[FilterState]) -> FilterState:
        return filters or self.context.settings.default_filters

    def visible_events(self) -> List[CalendarEvent]:
        return events_for_brand(self.store.list_events(), self.brand_id, self.store.hidden_ids(self.brand_id))

    def year_view(self, year: int, filters: Optional[FilterState] = None, query: Optional[str] = None) -> YearView:
        resolved = self._filters(filters)
        key = layout_key(
            brand_id=self.brand_id,
            year=year,
            filters=resolved,
            query=query,
            revision=self.store.revision,
        )

        def _compute() -> YearView:
            materialized = materialize_recurring_events(self.visible_events(), year)
            projected = sort_events(project_events(materialized, resolved, query))
            return YearView(year=year, events=tuple(projected), by_month=group_by_month(projected, year))

        return self.context.cache.get_or_compute(key, _compute)

    def month_cards(self, year: int, filters: Optional[FilterState] = None, query: Optional[str] = None) -> List[MonthCard]:
        layout = self.context.settings.layout
        view = self.year_view(year, filters, query)
        cards: list[MonthCard] = []
        for month in range(12):
            events = view.by_month[month]
            buckets = partition_events(events)
            single = [event for event in events if not is_multi_day(event)]
            cards.append(
                MonthCard(
                    month=month,
                    name=MONTH_NAMES_SHORT[month],
                    single_day=truncate(single, layout.month_card_limit),
                    ranges=truncate(buckets.multi_day, layout.range_bar_limit),
                    total=len(events),
                    note=self.store.get_month_note(self.brand_id, year, month),
                )
            )
        return cards

    def month_layout(
        self,
        month: int,
        year: int,
        filters: Optional[FilterState] = None,
        query: Optional[str] = None,
    ) -> MonthLayout:
        grid = build_month_grid(month, year)
        view = self.year_view(year, filters, query)
        events = [event for event in view.events if span_overlaps_range(event, grid.first, grid.last)]
        buckets = partition_events(events)
        preview = self.drag.preview()
        weeks = tuple(
            WeekLayout(days=tuple(week), spans=tuple(project_week(week, buckets.multi_day, preview=preview)))
            for week in grid.weeks
        )
        state = self.drag.state
        return MonthLayout(
            grid=grid,
            buckets=buckets,
            weeks=weeks,
            preview=preview,
            pointer_fraction=state.pointer_fraction() if state else None,
        )

    # -- drag handlers ---------------------------------------------------------

    def start_move(self, event: CalendarEvent, *, origin_month: Optional[MonthRef] = None) -> bool:
        return self.drag.start_move(event, origin_month=origin_month)

    def start_extend(self, event: CalendarEvent, *, origin_month: Optional[MonthRef] = None) -> bool:
        return self.drag.start_extend(event, origin_month=origin_month)

    def hover(
        self,
        day: date,
        *,
        pointer_x: Optional[float] = None,
        week_rect: Optional[WeekRect] = None,
        week_index: Optional[int] = None,
    ) -> Optional[CalendarEvent]:
        return self.drag.hover(day, pointer_x=pointer_x, week_rect=week_rect, week_index=week_index)

    def drop(self, day: date) -> DropOutcome:
        state = self.drag.state
        outcome = self.drag.drop(day)
        if outcome.mutation is not None and state is not None:
            self._commit(state.subject, outcome.mutation, state.mode)
        return outcome

    def cancel_drag(self) -> None:
        self.drag.cancel()

    def _commit(self, subject: CalendarEvent, mutation: DateMutation, mode: DragMode) -> CalendarEvent:
        start, end = mutation.start_date, mutation.end_date
        template = self.store.get_event(subject.source_id) if subject.source_id is not None else None
        if template is not None:
            # Day offsets, not year shifts: the template may start on Feb 29.
            if mode is DragMode.EXTEND:
                start = template.start_date
                years = template.start_date.year - subject.start_date.year
                end = shift_years(mutation.end_date, years)
            else:
                start = template.start_date + (mutation.start_date - subject.start_date)
                end = start + (mutation.end_date - mutation.start_date) if mutation.end_date is not None else None
        logger.info("Committing drag of %s: %s -> %s", subject.template_id, start, end)
        return self.store.update_event(subject.template_id, {"start_date": start, "end_date": end})

    # -- removal ---------------------------------------------------------------

    def remove_event(self, event: CalendarEvent) -> Removal:
        return self.store.remove_event(event.template_id, self.brand_id)

    def undo_delete(self) -> Optional[CalendarEvent]:
        return self.store.undo_delete()

    def import_global_events(self, events: Sequence[CalendarEvent]) -> int:
        return self.store.import_global_events(events)

    def set_month_note(self, year: int, month: int, note: str) -> None:
        self.store.set_month_note(self.brand_id, year, month, note)
