from datetime import date

import pytest

from marketing_calendar.core.filters import FilterState, filter_events, project_events, search_events
from marketing_calendar.domain import EventCategory


@pytest.fixture
def mixed(make_event):
    return [
        make_event("holiday", EventCategory.PUBLIC_HOLIDAY, date(2025, 4, 27), title="Freedom Day", owner=None),
        make_event("culture", EventCategory.CULTURE, date(2025, 2, 14), title="Valentine's Day", owner=None),
        make_event("term", EventCategory.SCHOOL_TERM, date(2025, 1, 15), title="Term 1 starts", owner=None),
        make_event(
            "flight",
            EventCategory.CAMPAIGN_FLIGHT,
            date(2025, 3, 10),
            end=date(2025, 3, 15),
            title="Autumn Sale",
            tags=("Retail",),
            notes="Paid social push",
        ),
        make_event("deadline", EventCategory.DEADLINE, date(2025, 3, 1), title="Assets due"),
    ]


def test_defaults_pass_everything(mixed):
    assert filter_events(mixed, FilterState()) == mixed


def test_key_dates_toggle_hides_holidays_and_culture(mixed):
    filters = FilterState().toggle("key_dates")
    assert [event.id for event in filter_events(mixed, filters)] == ["term", "flight", "deadline"]


def test_key_date_category_ignores_the_key_dates_toggle(make_event):
    anchor = make_event("anchor", EventCategory.KEY_DATE, date(2025, 5, 11), title="Mother's Day", owner=None)

    assert filter_events([anchor], FilterState(key_dates=False)) == [anchor]


def test_toggle_rejects_unknown_names():
    with pytest.raises(KeyError):
        FilterState().toggle("birthdays")


def test_from_mapping_ignores_unknown_keys():
    filters = FilterState.from_mapping({"school": False, "unknown": False})
    assert filters == FilterState(school=False)
    assert filters.to_mapping()["school"] is False


@pytest.mark.parametrize(
    "query, expected",
    [
        ("sale", ["flight"]),
        ("RETAIL", ["flight"]),
        ("paid social", ["flight"]),
        ("day", ["holiday", "culture"]),
    ],
)
def test_search_matches_title_tags_and_notes_case_insensitively(mixed, query, expected):
    assert [event.id for event in search_events(mixed, query)] == expected


@pytest.mark.parametrize("query", [None, "", "   "])
def test_blank_query_passes_everything(mixed, query):
    assert search_events(mixed, query) == mixed


def test_project_applies_filters_and_search(mixed):
    filters = FilterState(key_dates=False)
    assert project_events(mixed, filters, "day") == []
    assert [event.id for event in project_events(mixed, filters, "due")] == ["deadline"]
