from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core import DropOutcome, GridDay, WeekSpan
from ..core.interval import format_date_range, layout_end
from ..core.planning import PlanningPrompt
from ..domain import CalendarEvent


class EventPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    brand_id: Optional[str] = Field(default=None, alias="brandId")
    title: str
    type: str
    start_date: str = Field(alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    label: str
    tags: List[str] = Field(default_factory=list)
    importance: str
    visibility: str
    notes: str = Field(default="")
    style: str
    recurring: bool = Field(default=False)
    source_id: Optional[str] = Field(default=None, alias="sourceId")

    @classmethod
    def from_domain(cls, event: CalendarEvent) -> "EventPayload":
        return cls(
            id=event.id,
            brand_id=event.owner_id,
            title=event.title,
            type=event.category.value,
            start_date=event.start_date.isoformat(),
            end_date=_iso(event.end_date),
            label=format_date_range(event.start_date, layout_end(event)),
            tags=list(event.tags),
            importance=event.importance.value,
            visibility=event.visibility.value,
            notes=event.notes,
            style=event.style_key,
            recurring=event.is_recurring,
            source_id=event.source_id,
        )


class WeekSpanPayload(BaseModel):
    event: EventPayload
    start_column: int = Field(ge=0, le=6)
    end_column: int = Field(ge=0, le=6)
    starts_in_week: bool
    ends_in_week: bool
    stack_row: int = Field(ge=0)
    is_preview: bool = Field(default=False)
    left: float
    width: float

    @classmethod
    def from_domain(cls, span: WeekSpan, *, inset: float) -> "WeekSpanPayload":
        geometry = span.geometry(inset)
        return cls(
            event=EventPayload.from_domain(span.event),
            start_column=span.start_column,
            end_column=span.end_column,
            starts_in_week=span.starts_in_week,
            ends_in_week=span.ends_in_week,
            stack_row=span.stack_row,
            is_preview=span.is_preview,
            left=geometry.left,
            width=geometry.width,
        )


class DayCellPayload(BaseModel):
    day: str
    in_month: bool
    is_weekend: bool
    is_today: bool
    events: List[EventPayload] = Field(default_factory=list)
    hidden_count: int = Field(default=0, ge=0)

    @classmethod
    def from_domain(cls, day: GridDay, events: List[CalendarEvent], hidden_count: int) -> "DayCellPayload":
        return cls(
            day=day.key,
            in_month=day.in_month,
            is_weekend=day.is_weekend,
            is_today=day.is_today,
            events=[EventPayload.from_domain(event) for event in events],
            hidden_count=hidden_count,
        )


class WeekPayload(BaseModel):
    days: List[DayCellPayload]
    spans: List[WeekSpanPayload]
    rows: int


class MonthLayoutPayload(BaseModel):
    month: int = Field(ge=0, le=11)
    year: int
    weeks: List[WeekPayload]
    pointer_fraction: Optional[float] = Field(default=None, ge=0, le=1)


class DropOutcomePayload(BaseModel):
    accepted: bool
    changed: bool
    reason: Optional[str] = Field(default=None)
    event_id: Optional[str] = Field(default=None)
    start_date: Optional[str] = Field(default=None)
    end_date: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, outcome: DropOutcome) -> "DropOutcomePayload":
        mutation = outcome.mutation
        return cls(
            accepted=outcome.accepted,
            changed=outcome.changed,
            reason=outcome.reason.value if outcome.reason else None,
            event_id=mutation.event_id if mutation else None,
            start_date=_iso(mutation.start_date) if mutation else None,
            end_date=_iso(mutation.end_date) if mutation else None,
        )


class PlanningPromptPayload(BaseModel):
    title: str
    description: str
    lead_time_days: int
    suggested_channels: List[str]
    creative_angle: str
    offer_pattern: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, prompt: PlanningPrompt) -> "PlanningPromptPayload":
        return cls(
            title=prompt.title,
            description=prompt.description,
            lead_time_days=prompt.lead_time_days,
            suggested_channels=[channel.value for channel in prompt.suggested_channels],
            creative_angle=prompt.creative_angle,
            offer_pattern=prompt.offer_pattern,
        )


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None
