from __future__ import annotations

import logging
from copy import deepcopy
from dataclasses import fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Protocol
from uuid import uuid4

import orjson

from ..domain import CalendarEvent, InvalidEventRecord, events_from_records
from .config import EVENTS_FILE

logger = logging.getLogger(__name__)

UNDO_DEPTH = 10

DEFAULT_STORE_STATE: Dict[str, Any] = {
    "events": [],
    "hiddenEventsByBrand": {},
    "monthNotes": {},
    "deletedEvents": [],
    "lastHiddenEventBrandId": None,
    "revision": 0,
}

_UPDATABLE_FIELDS = frozenset(item.name for item in fields(CalendarEvent)) - {"id", "source_id"}


class EventNotFoundError(KeyError):
    """Raised when an event id is not present in the store."""


class Removal(str, Enum):
    HIDDEN = "hidden"
    DELETED = "deleted"


class EventStore(Protocol):
    def list_events(self) -> List[CalendarEvent]: ...

    def create_event(self, data: Mapping[str, Any]) -> CalendarEvent: ...

    def update_event(self, event_id: str, changes: Mapping[str, Any]) -> CalendarEvent: ...

    def delete_event(self, event_id: str) -> bool: ...


def _check_span(event: CalendarEvent) -> None:
    if event.end_date is not None and event.end_date < event.start_date:
        raise InvalidEventRecord(
            f"endDate {event.end_date.isoformat()} is before startDate {event.start_date.isoformat()}"
        )


class JsonEventStore:
    """Event store persisted to a single JSON document."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path or EVENTS_FILE
        self._state: Optional[Dict[str, Any]] = None

    def _ensure_materialized(self) -> None:
        if self._state is not None:
            return
        if not self._path.exists():
            self._state = deepcopy(DEFAULT_STORE_STATE)
            return
        raw = self._path.read_bytes()
        if not raw:
            self._state = deepcopy(DEFAULT_STORE_STATE)
            return
        self._state = orjson.loads(raw)
        # Backfill missing keys when upgrading.
        for key, value in DEFAULT_STORE_STATE.items():
            if key not in self._state:
                self._state[key] = deepcopy(value)

    @property
    def data(self) -> Dict[str, Any]:
        self._ensure_materialized()
        assert self._state is not None
        return self._state

    @property
    def revision(self) -> int:
        return int(self.data.get("revision", 0))

    def persist(self) -> None:
        if self._state is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = orjson.dumps(self._state, option=orjson.OPT_INDENT_2)
        self._path.write_bytes(payload + b"\n")

    def mutate(self, callback: Callable[[Dict[str, Any]], Any]) -> Any:
        self._ensure_materialized()
        assert self._state is not None
        result = callback(self._state)
        self._state["revision"] = self._state.get("revision", 0) + 1
        self.persist()
        return result

    # -- event store interface -------------------------------------------------

    def list_events(self) -> List[CalendarEvent]:
        return events_from_records(self.data["events"])

    def get_event(self, event_id: str) -> Optional[CalendarEvent]:
        for record in self.data["events"]:
            if record.get("id") == event_id:
                return CalendarEvent.from_record(record)
        return None

    def create_event(self, data: Mapping[str, Any]) -> CalendarEvent:
        record = dict(data)
        record["id"] = str(uuid4())
        event = CalendarEvent.from_record(record)
        _check_span(event)

        def _append(state: Dict[str, Any]) -> None:
            state["events"].append(event.to_record())

        self.mutate(_append)
        logger.info("Created event %s (%s)", event.id, event.title)
        return event

    def update_event(self, event_id: str, changes: Mapping[str, Any]) -> CalendarEvent:
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        index = self._index_of(event_id)
        updated = replace(CalendarEvent.from_record(self.data["events"][index]), **changes)
        _check_span(updated)

        def _write(state: Dict[str, Any]) -> None:
            state["events"][index] = updated.to_record()

        self.mutate(_write)
        logger.info("Updated event %s: %s", event_id, ", ".join(sorted(changes)))
        return updated

    def delete_event(self, event_id: str) -> bool:
        try:
            index = self._index_of(event_id)
        except EventNotFoundError:
            return False

        def _remove(state: Dict[str, Any]) -> None:
            state["events"].pop(index)

        self.mutate(_remove)
        logger.info("Deleted event %s", event_id)
        return True

    def _index_of(self, event_id: str) -> int:
        for index, record in enumerate(self.data["events"]):
            if record.get("id") == event_id:
                return index
        raise EventNotFoundError(event_id)

    # -- soft hide and undo ----------------------------------------------------

    def hidden_ids(self, brand_id: Optional[str]) -> FrozenSet[str]:
        if brand_id is None:
            return frozenset()
        return frozenset(self.data["hiddenEventsByBrand"].get(brand_id, []))

    def hide_event_for_brand(self, event_id: str, brand_id: str) -> None:
        def _hide(state: Dict[str, Any]) -> None:
            hidden = state["hiddenEventsByBrand"].setdefault(brand_id, [])
            if event_id not in hidden:
                hidden.append(event_id)

        self.mutate(_hide)

    def unhide_event_for_brand(self, event_id: str, brand_id: str) -> None:
        def _unhide(state: Dict[str, Any]) -> None:
            hidden = state["hiddenEventsByBrand"].get(brand_id, [])
            state["hiddenEventsByBrand"][brand_id] = [item for item in hidden if item != event_id]

        self.mutate(_unhide)

    def remove_event(self, event_id: str, brand_id: Optional[str] = None) -> Removal:
        """Hide a global event for ``brand_id``, otherwise delete it; either way it can be undone."""

        index = self._index_of(event_id)
        record = deepcopy(self.data["events"][index])
        hide = record.get("brandId") is None and brand_id is not None

        def _remove(state: Dict[str, Any]) -> None:
            if hide:
                hidden = state["hiddenEventsByBrand"].setdefault(brand_id, [])
                if event_id not in hidden:
                    hidden.append(event_id)
                state["lastHiddenEventBrandId"] = brand_id
            else:
                state["events"].pop(index)
                state["lastHiddenEventBrandId"] = None
            state["deletedEvents"] = [record, *state["deletedEvents"]][:UNDO_DEPTH]

        self.mutate(_remove)
        removal = Removal.HIDDEN if hide else Removal.DELETED
        logger.info("Removed event %s (%s)", event_id, removal.value)
        return removal

    def undo_delete(self) -> Optional[CalendarEvent]:
        deleted = self.data["deletedEvents"]
        if not deleted:
            return None
        record = deleted[0]
        brand_id = self.data.get("lastHiddenEventBrandId")

        def _restore(state: Dict[str, Any]) -> None:
            state["deletedEvents"] = state["deletedEvents"][1:]
            if record.get("brandId") is None and brand_id:
                hidden = state["hiddenEventsByBrand"].get(brand_id, [])
                state["hiddenEventsByBrand"][brand_id] = [item for item in hidden if item != record["id"]]
            else:
                state["events"].append(record)
            state["lastHiddenEventBrandId"] = None

        self.mutate(_restore)
        return CalendarEvent.from_record(record)

    # -- month notes -----------------------------------------------------------

    @staticmethod
    def _note_key(brand_id: Optional[str], year: int, month: int) -> str:
        return f"{brand_id or 'global'}-{year}-{month}"

    def get_month_note(self, brand_id: Optional[str], year: int, month: int) -> str:
        return self.data["monthNotes"].get(self._note_key(brand_id, year, month), "")

    def set_month_note(self, brand_id: Optional[str], year: int, month: int, note: str) -> None:
        """Store the planning note for a month (0-11); an empty note removes it."""

        key = self._note_key(brand_id, year, month)

        def _write(state: Dict[str, Any]) -> None:
            if note:
                state["monthNotes"][key] = note
            else:
                state["monthNotes"].pop(key, None)

        self.mutate(_write)

    # -- dataset import --------------------------------------------------------

    def import_global_events(self, events: Iterable[CalendarEvent]) -> int:
        records = [event.to_record() for event in events if event.is_global]

        def _replace(state: Dict[str, Any]) -> None:
            state["events"] = [item for item in state["events"] if item.get("brandId") is not None] + records

        self.mutate(_replace)
        logger.info("Imported %d global events", len(records))
        return len(records)

    def clear_global_events(self) -> None:
        def _clear(state: Dict[str, Any]) -> None:
            state["events"] = [item for item in state["events"] if item.get("brandId") is not None]

        self.mutate(_clear)


__all__ = [
    "DEFAULT_STORE_STATE",
    "EventNotFoundError",
    "EventStore",
    "JsonEventStore",
    "Removal",
]
