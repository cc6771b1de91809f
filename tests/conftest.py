"""
Pytest configuration and shared fixtures.
"""

from datetime import date

import pytest

from marketing_calendar.config import get_settings
from marketing_calendar.core import JsonEventStore
from marketing_calendar.domain import CalendarEvent, EventCategory, Recurrence
from marketing_calendar.services import CalendarService, ServiceContext

BRAND = "brand-1"


@pytest.fixture
def make_event():
    """Factory for calendar events with brand ownership by default."""

    def _make(
        event_id="evt",
        category=EventCategory.CAMPAIGN_FLIGHT,
        start=date(2025, 3, 10),
        end=None,
        *,
        owner=BRAND,
        title=None,
        recurring=False,
        **extra,
    ):
        return CalendarEvent(
            id=event_id,
            owner_id=owner,
            title=title or event_id,
            category=category,
            start_date=start,
            end_date=end,
            recurrence=Recurrence() if recurring else None,
            **extra,
        )

    return _make


@pytest.fixture
def brand_id():
    return BRAND


@pytest.fixture
def store(tmp_path):
    return JsonEventStore(tmp_path / "events.json")


@pytest.fixture
def settings():
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def service(store, settings):
    return CalendarService(ServiceContext(settings=settings, store=store, brand_id=BRAND))
