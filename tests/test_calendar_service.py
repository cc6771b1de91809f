from datetime import date

import pytest

from marketing_calendar.core import FilterState, Removal, WeekRect
from marketing_calendar.domain import CalendarEvent, EventCategory, Recurrence


def _flight(**overrides):
    data = {
        "brandId": "brand-1",
        "title": "Autumn Sale",
        "type": "campaignFlight",
        "startDate": "2025-03-10",
        "endDate": "2025-03-15",
    }
    data.update(overrides)
    return data


def _global(event_id, title, day, category=EventCategory.PUBLIC_HOLIDAY, recurring=False):
    return CalendarEvent(
        id=event_id,
        owner_id=None,
        title=title,
        category=category,
        start_date=day,
        recurrence=Recurrence() if recurring else None,
    )


def test_year_view_materializes_and_scopes_to_brand(service, store):
    store.import_global_events([_global("xmas", "Christmas Day", date(2020, 12, 25), recurring=True)])
    own = store.create_event(_flight())
    store.create_event(_flight(brandId="brand-2", title="Competitor"))

    view = service.year_view(2025)

    assert [event.id for event in view.events] == ["xmas-2025", own.id]
    assert view.by_month[11][0].start_date == date(2025, 12, 25)
    assert view.by_month[2] == [view.events[1]]


def test_year_view_respects_hidden_globals_filters_and_query(service, store):
    store.import_global_events(
        [
            _global("freedom", "Freedom Day", date(2025, 4, 27)),
            _global("youth", "Youth Day", date(2025, 6, 16)),
        ]
    )
    store.create_event(_flight())
    service.remove_event(service.year_view(2025).events[0])

    assert [event.id for event in service.year_view(2025).events][:1] == ["youth"]
    assert [event.title for event in service.year_view(2025, FilterState(key_dates=False)).events] == ["Autumn Sale"]
    assert [event.title for event in service.year_view(2025, query="YOUTH").events] == ["Youth Day"]


def test_year_view_is_cached_until_the_store_changes(service, store):
    store.create_event(_flight())

    first = service.year_view(2025, query="sale")
    second = service.year_view(2025, query="SALE")

    assert second is first
    assert service.context.cache.hits == 1

    store.create_event(_flight(title="Winter Sale", startDate="2025-06-01", endDate="2025-06-05"))
    third = service.year_view(2025, query="sale")

    assert third is not first
    assert len(third.events) == 2


def test_month_layout_places_bars_and_cells(service, store):
    flight = store.create_event(_flight())
    for index in range(4):
        store.create_event(_flight(title=f"Launch {index}", type="brandMoment", startDate="2025-03-12", endDate=None))

    layout = service.month_layout(2, 2025)

    assert len(layout.weeks) == 6
    week = layout.weeks[2]
    assert week.days[0] == date(2025, 3, 10)
    assert [(span.event.id, span.start_column, span.end_column) for span in week.spans] == [(flight.id, 0, 5)]
    assert week.rows == 1
    cell = layout.cell(date(2025, 3, 12), 3)
    assert len(cell.visible) == 3
    assert cell.hidden_count == 1


def test_month_layout_shows_drag_preview(service, store):
    store.create_event(_flight())
    flight = service.year_view(2025).events[0]

    service.start_move(flight)
    service.hover(date(2025, 3, 17))
    layout = service.month_layout(2, 2025)

    assert layout.weeks[2].spans == ()
    (span,) = layout.weeks[3].spans
    assert span.is_preview
    assert (span.start_column, span.end_column) == (0, 5)


def test_drop_commits_the_mutation(service, store):
    created = store.create_event(_flight())
    flight = service.year_view(2025).events[0]

    service.start_move(flight)
    outcome = service.drop(date(2025, 3, 20))

    assert outcome.changed
    stored = store.get_event(created.id)
    assert (stored.start_date, stored.end_date) == (date(2025, 3, 20), date(2025, 3, 25))
    assert not service.drag.is_dragging


def test_rejected_drop_leaves_store_untouched(service, store):
    created = store.create_event(_flight())
    revision = store.revision

    service.start_move(service.year_view(2025).events[0])
    outcome = service.drop(date(2025, 4, 2))

    assert not outcome.accepted
    assert store.revision == revision
    assert store.get_event(created.id) == created


def test_drag_of_recurring_instance_updates_its_template(service, store):
    template = store.create_event(_flight(startDate="2024-03-10", endDate="2024-03-15", recurrence={"freq": "yearly"}))
    instance = service.year_view(2025).events[0]
    assert instance.id == f"{template.id}-2025"

    service.start_extend(instance)
    service.drop(date(2025, 3, 18))

    stored = store.get_event(template.id)
    assert (stored.start_date, stored.end_date) == (date(2024, 3, 10), date(2024, 3, 18))
    assert [event.id for event in service.year_view(2025).events] == [instance.id]


def test_extending_a_clamped_leap_day_instance_keeps_the_template_start(service, store):
    template = store.create_event(_flight(startDate="2024-02-29", endDate=None, recurrence={"freq": "yearly"}))
    instance = service.year_view(2025).events[0]
    assert instance.start_date == date(2025, 2, 28)

    service.start_extend(instance)
    service.drop(date(2025, 3, 4))

    stored = store.get_event(template.id)
    assert (stored.start_date, stored.end_date) == (date(2024, 2, 29), date(2024, 3, 4))


def test_moving_a_clamped_leap_day_instance_rebases_by_day_offset(service, store):
    template = store.create_event(_flight(startDate="2024-02-29", endDate="2024-03-02", recurrence={"freq": "yearly"}))
    instance = service.year_view(2025).events[0]
    assert (instance.start_date, instance.end_date) == (date(2025, 2, 28), date(2025, 3, 2))

    service.start_move(instance)
    service.drop(date(2025, 2, 26))

    stored = store.get_event(template.id)
    assert (stored.start_date, stored.end_date) == (date(2024, 2, 27), date(2024, 2, 29))


def test_remove_instance_removes_template_and_undo_restores(service, store):
    template = store.create_event(_flight(startDate="2024-03-10", endDate="2024-03-15", recurrence={"freq": "yearly"}))
    instance = service.year_view(2025).events[0]

    assert service.remove_event(instance) is Removal.DELETED
    assert service.year_view(2025).events == ()

    assert service.undo_delete().id == template.id
    assert len(service.year_view(2025).events) == 1


def test_month_cards_truncate_per_month(service, store):
    for day in range(1, 8):
        store.create_event(_flight(title=f"Launch {day}", type="brandMoment", startDate=f"2025-05-0{day}", endDate=None))
    for index in range(4):
        store.create_event(_flight(title=f"Flight {index}"))

    cards = service.month_cards(2025)

    assert len(cards) == 12
    may, march = cards[4], cards[2]
    assert may.name == "May"
    assert (len(may.single_day.visible), may.single_day.hidden_count, may.total) == (5, 2, 7)
    assert (len(march.ranges.visible), march.ranges.hidden_count) == (3, 1)


def test_month_layout_reports_extend_pointer_fraction(service, store):
    store.create_event(_flight())
    service.start_extend(service.year_view(2025).events[0])
    service.hover(date(2025, 3, 18), pointer_x=300.0, week_rect=WeekRect(left=100.0, width=700.0))

    layout = service.month_layout(2, 2025)

    assert layout.pointer_fraction == pytest.approx(200 / 700)
    service.cancel_drag()
    assert service.month_layout(2, 2025).pointer_fraction is None


def test_month_cards_carry_brand_month_notes(service, store):
    service.set_month_note(2025, 4, "Mother's Day push")
    store.set_month_note("brand-2", 2025, 4, "Other brand")

    cards = service.month_cards(2025)

    assert cards[4].note == "Mother's Day push"
    assert cards[5].note == ""


def test_select_brand_cancels_active_drag(service, store):
    store.create_event(_flight())
    service.start_move(service.year_view(2025).events[0])

    service.select_brand("brand-2")

    assert not service.drag.is_dragging
    assert service.drag.brand_id == "brand-2"
    assert service.year_view(2025).events == ()


def test_import_global_events(service):
    count = service.import_global_events([_global("freedom", "Freedom Day", date(2025, 4, 27))])
    assert count == 1
    assert [event.id for event in service.visible_events()] == ["freedom"]
