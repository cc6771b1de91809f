from datetime import date

from marketing_calendar.core.bucketing import group_by_month, partition_events, sort_events, truncate
from marketing_calendar.domain import EventCategory


def test_sort_orders_by_category_priority_then_start(make_event):
    events = [
        make_event("season", EventCategory.SEASON, date(2025, 3, 1)),
        make_event("flight-late", EventCategory.CAMPAIGN_FLIGHT, date(2025, 3, 20)),
        make_event("flight-early", EventCategory.CAMPAIGN_FLIGHT, date(2025, 3, 2)),
        make_event("deadline", EventCategory.DEADLINE, date(2025, 3, 25)),
        make_event("holiday", EventCategory.PUBLIC_HOLIDAY, date(2025, 3, 21)),
    ]
    assert [event.id for event in sort_events(events)] == [
        "holiday",
        "deadline",
        "flight-early",
        "flight-late",
        "season",
    ]


def test_partition_routes_ranges_to_multi_day_and_keys_singles_by_day(make_event):
    flight = make_event("flight", start=date(2025, 3, 10), end=date(2025, 3, 15))
    launch = make_event("launch", EventCategory.BRAND_MOMENT, date(2025, 3, 12))
    holiday = make_event("holiday", EventCategory.PUBLIC_HOLIDAY, date(2025, 3, 21), end=date(2025, 3, 23))

    buckets = partition_events([flight, launch, holiday])

    assert buckets.multi_day == [flight]
    assert buckets.for_day(date(2025, 3, 12)) == [launch]
    assert buckets.for_day(date(2025, 3, 21)) == [holiday]
    assert buckets.for_day(date(2025, 3, 22)) == []
    assert buckets.single_day_count == 2


def test_truncate_reports_hidden_count(make_event):
    events = [make_event(f"e{index}") for index in range(5)]

    result = truncate(events, 3)
    assert [event.id for event in result.visible] == ["e0", "e1", "e2"]
    assert result.hidden_count == 2

    assert truncate(events, 10).hidden_count == 0
    assert truncate(events, 0).visible == ()


def test_group_by_month_places_ranges_in_every_month_they_touch(make_event):
    bridge = make_event("bridge", start=date(2025, 1, 30), end=date(2025, 2, 2))
    single = make_event("single", EventCategory.KEY_DATE, date(2025, 5, 5))

    months = group_by_month([bridge, single], 2025)

    assert sorted(months) == list(range(12))
    assert months[0] == [bridge]
    assert months[1] == [bridge]
    assert months[4] == [single]
    assert months[6] == []
