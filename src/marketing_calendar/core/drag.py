from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from ..domain import CalendarEvent
from .interval import duration_days, is_multi_day, supports_multi_day

logger = logging.getLogger(__name__)

# (year, month) with month in 0-11
MonthRef = Tuple[int, int]


class DragMode(str, Enum):
    MOVE = "move"
    EXTEND = "extend"


class RejectReason(str, Enum):
    GLOBAL_EVENT = "global_event"
    NOT_OWNED = "not_owned"
    NOT_EXTENDABLE = "not_extendable"
    OUTSIDE_ORIGIN_MONTH = "outside_origin_month"
    NO_ACTIVE_DRAG = "no_active_drag"


@dataclass(frozen=True)
class WeekRect:
    left: float
    width: float


@dataclass(frozen=True)
class DragState:
    mode: DragMode
    subject: CalendarEvent
    origin_month: MonthRef
    hover_date: Optional[date] = None
    pointer_x: Optional[float] = None
    hover_week_rect: Optional[WeekRect] = None
    hover_week_index: Optional[int] = None

    def pointer_fraction(self) -> Optional[float]:
        """Pointer position across the hovered week row, clamped to [0, 1]."""

        if self.pointer_x is None or self.hover_week_rect is None or self.hover_week_rect.width <= 0:
            return None
        fraction = (self.pointer_x - self.hover_week_rect.left) / self.hover_week_rect.width
        return min(max(fraction, 0.0), 1.0)


@dataclass(frozen=True)
class DateMutation:
    event_id: str
    start_date: date
    end_date: Optional[date]

    def as_fields(self) -> Dict[str, Optional[date]]:
        return {"start_date": self.start_date, "end_date": self.end_date}


@dataclass(frozen=True)
class DropOutcome:
    accepted: bool
    mutation: Optional[DateMutation] = None
    reason: Optional[RejectReason] = None

    @property
    def changed(self) -> bool:
        return self.mutation is not None


def _normalized_end(start: date, end: Optional[date]) -> Optional[date]:
    if end is None or end <= start:
        return None
    return end


def check_draggable(event: CalendarEvent, mode: DragMode, brand_id: Optional[str] = None) -> Optional[RejectReason]:
    if event.is_global:
        return RejectReason.GLOBAL_EVENT
    if brand_id is not None and event.owner_id != brand_id:
        return RejectReason.NOT_OWNED
    if mode is DragMode.EXTEND and not supports_multi_day(event.category):
        return RejectReason.NOT_EXTENDABLE
    return None


def move_preview(event: CalendarEvent, hover: date) -> Optional[CalendarEvent]:
    if not is_multi_day(event) or hover == event.start_date:
        return None
    return replace(event, start_date=hover, end_date=hover + timedelta(days=duration_days(event)))


def extend_preview(event: CalendarEvent, hover: date) -> Optional[CalendarEvent]:
    candidate = _normalized_end(event.start_date, hover)
    if candidate == _normalized_end(event.start_date, event.end_date):
        return None
    return replace(event, end_date=candidate)


def resolve_move(event: CalendarEvent, drop: date, origin_month: MonthRef) -> DropOutcome:
    year, month = origin_month
    if (drop.year, drop.month - 1) != (year, month):
        return DropOutcome(accepted=False, reason=RejectReason.OUTSIDE_ORIGIN_MONTH)
    if drop == event.start_date:
        return DropOutcome(accepted=True)
    end = drop + timedelta(days=duration_days(event)) if event.end_date is not None else None
    return DropOutcome(accepted=True, mutation=DateMutation(event.id, drop, end))


def resolve_extend(event: CalendarEvent, drop: date) -> DropOutcome:
    end = drop if drop > event.start_date else None
    if end == event.end_date:
        return DropOutcome(accepted=True)
    return DropOutcome(accepted=True, mutation=DateMutation(event.id, event.start_date, end))


class PointerRouting:
    """Whether bar elements receive pointer events; suspended while a drag is active."""

    def __init__(self) -> None:
        self.suspended = False
        self._listeners: List[Callable[[bool], None]] = []

    def subscribe(self, listener: Callable[[bool], None]) -> None:
        self._listeners.append(listener)

    def _set(self, suspended: bool) -> None:
        if self.suspended == suspended:
            return
        self.suspended = suspended
        for listener in list(self._listeners):
            listener(suspended)

    def suspend(self) -> None:
        self._set(True)

    def restore(self) -> None:
        self._set(False)


class DragController:
    """Single-slot drag state machine: Idle, Dragging(move) or Dragging(extend)."""

    def __init__(self, *, brand_id: Optional[str] = None, routing: Optional[PointerRouting] = None) -> None:
        self.brand_id = brand_id
        self.routing = routing or PointerRouting()
        self._state: Optional[DragState] = None

    @property
    def state(self) -> Optional[DragState]:
        return self._state

    @property
    def is_dragging(self) -> bool:
        return self._state is not None

    @property
    def mode(self) -> Optional[DragMode]:
        return self._state.mode if self._state else None

    def start_move(self, event: CalendarEvent, *, origin_month: Optional[MonthRef] = None) -> bool:
        return self._begin(DragMode.MOVE, event, origin_month)

    def start_extend(self, event: CalendarEvent, *, origin_month: Optional[MonthRef] = None) -> bool:
        return self._begin(DragMode.EXTEND, event, origin_month)

    def _begin(self, mode: DragMode, event: CalendarEvent, origin_month: Optional[MonthRef]) -> bool:
        if self._state is not None:
            logger.debug("Discarding previous %s drag of %s", self._state.mode.value, self._state.subject.id)
            self._finish()
        reason = check_draggable(event, mode, self.brand_id)
        if reason is not None:
            logger.debug("Rejected %s drag of %s: %s", mode.value, event.id, reason.value)
            return False
        origin = origin_month or (event.start_date.year, event.start_date.month - 1)
        self._state = DragState(mode=mode, subject=event, origin_month=origin)
        self.routing.suspend()
        logger.debug("Started %s drag of %s", mode.value, event.id)
        return True

    def hover(
        self,
        day: date,
        *,
        pointer_x: Optional[float] = None,
        week_rect: Optional[WeekRect] = None,
        week_index: Optional[int] = None,
    ) -> Optional[CalendarEvent]:
        if self._state is None:
            return None
        if self._state.mode is DragMode.EXTEND:
            self._state = replace(
                self._state,
                hover_date=day,
                pointer_x=pointer_x,
                hover_week_rect=week_rect,
                hover_week_index=week_index,
            )
        else:
            self._state = replace(self._state, hover_date=day, hover_week_index=week_index)
        return self.preview()

    def preview(self) -> Optional[CalendarEvent]:
        state = self._state
        if state is None or state.hover_date is None:
            return None
        if state.mode is DragMode.MOVE:
            return move_preview(state.subject, state.hover_date)
        return extend_preview(state.subject, state.hover_date)

    def drop(self, day: date) -> DropOutcome:
        state = self._state
        if state is None:
            return DropOutcome(accepted=False, reason=RejectReason.NO_ACTIVE_DRAG)
        try:
            if state.mode is DragMode.MOVE:
                outcome = resolve_move(state.subject, day, state.origin_month)
            else:
                outcome = resolve_extend(state.subject, day)
        finally:
            self._finish()
        if outcome.accepted:
            logger.debug("Dropped %s on %s: %s", state.subject.id, day.isoformat(), outcome.mutation)
        else:
            logger.debug("Rejected drop of %s on %s: %s", state.subject.id, day.isoformat(), outcome.reason.value)
        return outcome

    def cancel(self) -> None:
        if self._state is not None:
            logger.debug("Cancelled %s drag of %s", self._state.mode.value, self._state.subject.id)
        self._finish()

    def _finish(self) -> None:
        self._state = None
        self.routing.restore()
