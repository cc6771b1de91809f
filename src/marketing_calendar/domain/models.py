from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .enums import (
    CATEGORY_STYLES,
    Channel,
    EventCategory,
    Importance,
    Objective,
    RecurrenceFrequency,
    Visibility,
)

logger = logging.getLogger(__name__)


class InvalidEventRecord(ValueError):
    """Raised when a stored record cannot be decoded into a CalendarEvent."""


def _parse_date(value: Any, *, key: str) -> date:
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError as exc:
            raise InvalidEventRecord(f"{key} must be formatted YYYY-MM-DD, got {value!r}") from exc
    raise InvalidEventRecord(f"{key} is required")


def _parse_enum(enum_cls, value: Any, *, key: str, default=None):
    if value is None or value == "":
        if default is None:
            raise InvalidEventRecord(f"{key} is required")
        return default
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise InvalidEventRecord(f"Unsupported {key}: {value!r}") from exc


@dataclass(frozen=True, slots=True)
class Recurrence:
    freq: RecurrenceFrequency = RecurrenceFrequency.YEARLY

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Recurrence":
        return cls(freq=_parse_enum(RecurrenceFrequency, record.get("freq"), key="recurrence.freq"))

    def to_record(self) -> Dict[str, Any]:
        return {"freq": self.freq.value}


@dataclass(frozen=True, slots=True)
class EventLink:
    label: str
    url: str

    def to_record(self) -> Dict[str, Any]:
        return {"label": self.label, "url": self.url}


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    id: str
    owner_id: Optional[str]
    title: str
    category: EventCategory
    start_date: date
    end_date: Optional[date] = None
    tags: Tuple[str, ...] = ()
    importance: Importance = Importance.MED
    visibility: Visibility = Visibility.CLIENT
    notes: str = ""
    custom_color: Optional[str] = None
    recurrence: Optional[Recurrence] = None
    channels: Tuple[Channel, ...] = ()
    objective: Optional[Objective] = None
    links: Tuple[EventLink, ...] = ()
    # Set on copies synthesized from a recurring template.
    source_id: Optional[str] = field(default=None, compare=False)

    @property
    def is_global(self) -> bool:
        return self.owner_id is None

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not None and self.recurrence.freq is RecurrenceFrequency.YEARLY

    @property
    def template_id(self) -> str:
        return self.source_id or self.id

    @property
    def style_key(self) -> str:
        if self.category is EventCategory.DEADLINE and self.custom_color:
            return self.custom_color
        return CATEGORY_STYLES[self.category]

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CalendarEvent":
        title = str(record.get("title") or "").strip()
        if not title:
            raise InvalidEventRecord("title is required")
        if record.get("id") in (None, ""):
            raise InvalidEventRecord("id is required")
        category = _parse_enum(EventCategory, record.get("type"), key="type")
        recurrence = record.get("recurrence")
        owner = record.get("brandId")
        return cls(
            id=str(record["id"]),
            owner_id=str(owner) if owner is not None else None,
            title=title,
            category=category,
            start_date=_parse_date(record.get("startDate"), key="startDate"),
            end_date=_parse_date(record["endDate"], key="endDate") if record.get("endDate") else None,
            tags=tuple(str(tag) for tag in record.get("tags") or ()),
            importance=_parse_enum(Importance, record.get("importance"), key="importance", default=Importance.MED),
            visibility=_parse_enum(Visibility, record.get("visibility"), key="visibility", default=Visibility.CLIENT),
            notes=record.get("notes") or "",
            custom_color=record.get("customColor") if category is EventCategory.DEADLINE else None,
            recurrence=Recurrence.from_record(recurrence) if recurrence else None,
            channels=tuple(Channel(item) for item in record.get("channels") or ()),
            objective=Objective(record["objective"]) if record.get("objective") else None,
            links=tuple(EventLink(label=str(item["label"]), url=str(item["url"])) for item in record.get("links") or ()),
        )

    def to_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "id": self.id,
            "brandId": self.owner_id,
            "title": self.title,
            "type": self.category.value,
            "startDate": self.start_date.isoformat(),
            "tags": list(self.tags),
            "importance": self.importance.value,
            "visibility": self.visibility.value,
        }
        if self.end_date is not None:
            record["endDate"] = self.end_date.isoformat()
        if self.notes:
            record["notes"] = self.notes
        if self.custom_color:
            record["customColor"] = self.custom_color
        if self.recurrence is not None:
            record["recurrence"] = self.recurrence.to_record()
        if self.channels:
            record["channels"] = [channel.value for channel in self.channels]
        if self.objective is not None:
            record["objective"] = self.objective.value
        if self.links:
            record["links"] = [link.to_record() for link in self.links]
        return record


def events_from_records(records: Iterable[Dict[str, Any]]) -> List[CalendarEvent]:
    """Decode records, skipping the ones that fail validation."""

    events: list[CalendarEvent] = []
    for record in records:
        try:
            events.append(CalendarEvent.from_record(record))
        except (InvalidEventRecord, KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed event record %r: %s", record.get("id"), exc)
    return events
