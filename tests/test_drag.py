from datetime import date

import pytest

from marketing_calendar.core.drag import (
    DragController,
    DragMode,
    PointerRouting,
    RejectReason,
    WeekRect,
    check_draggable,
)
from marketing_calendar.domain import EventCategory


@pytest.fixture
def routing():
    routing = PointerRouting()
    routing.seen = []
    routing.subscribe(routing.seen.append)
    return routing


@pytest.fixture
def controller(routing, brand_id):
    return DragController(brand_id=brand_id, routing=routing)


@pytest.fixture
def flight(make_event):
    return make_event("flight", start=date(2025, 3, 10), end=date(2025, 3, 15))


def test_global_event_cannot_be_dragged(controller, routing, make_event):
    holiday = make_event("holiday", EventCategory.PUBLIC_HOLIDAY, date(2025, 3, 21), owner=None)

    assert controller.start_move(holiday) is False
    assert controller.state is None
    assert not routing.suspended
    assert routing.seen == []


def test_draggability_rules(make_event, brand_id):
    assert check_draggable(make_event(owner=None), DragMode.MOVE) is RejectReason.GLOBAL_EVENT
    assert check_draggable(make_event(owner="other"), DragMode.MOVE, brand_id) is RejectReason.NOT_OWNED
    assert (
        check_draggable(make_event(category=EventCategory.KEY_DATE), DragMode.EXTEND, brand_id)
        is RejectReason.NOT_EXTENDABLE
    )
    assert check_draggable(make_event(category=EventCategory.KEY_DATE), DragMode.MOVE, brand_id) is None


def test_move_keeps_duration(controller, routing, flight):
    assert controller.start_move(flight)
    assert controller.mode is DragMode.MOVE
    assert routing.suspended

    outcome = controller.drop(date(2025, 3, 20))

    assert outcome.accepted and outcome.changed
    assert outcome.mutation.event_id == "flight"
    assert outcome.mutation.start_date == date(2025, 3, 20)
    assert outcome.mutation.end_date == date(2025, 3, 25)
    assert controller.state is None
    assert routing.seen == [True, False]


def test_move_of_single_day_event_keeps_no_end(controller, make_event):
    launch = make_event("launch", EventCategory.BRAND_MOMENT, date(2025, 3, 10))
    controller.start_move(launch)

    outcome = controller.drop(date(2025, 3, 12))

    assert outcome.mutation.as_fields() == {"start_date": date(2025, 3, 12), "end_date": None}


def test_move_outside_origin_month_is_rejected(controller, routing, flight):
    controller.start_move(flight)

    outcome = controller.drop(date(2025, 4, 2))

    assert not outcome.accepted
    assert outcome.reason is RejectReason.OUTSIDE_ORIGIN_MONTH
    assert outcome.mutation is None
    assert controller.state is None
    assert not routing.suspended


def test_move_uses_view_month_as_origin(controller, flight):
    controller.start_move(flight, origin_month=(2025, 3))
    outcome = controller.drop(date(2025, 4, 7))
    assert outcome.accepted
    assert outcome.mutation.end_date == date(2025, 4, 12)


def test_drop_on_current_start_is_a_no_op(controller, flight):
    controller.start_move(flight)
    outcome = controller.drop(date(2025, 3, 10))
    assert outcome.accepted
    assert not outcome.changed


def test_move_hover_previews_shifted_range(controller, flight):
    controller.start_move(flight)

    preview = controller.hover(date(2025, 3, 20), week_index=3)

    assert preview.start_date == date(2025, 3, 20)
    assert preview.end_date == date(2025, 3, 25)
    assert controller.state.hover_week_index == 3
    assert controller.hover(date(2025, 3, 10)) is None


def test_move_hover_has_no_preview_for_single_day_events(controller, make_event):
    controller.start_move(make_event(start=date(2025, 3, 10)))
    assert controller.hover(date(2025, 3, 12)) is None


@pytest.mark.parametrize(
    "drop, expected_end",
    [
        (date(2025, 3, 20), date(2025, 3, 20)),
        (date(2025, 3, 11), date(2025, 3, 11)),
        (date(2025, 3, 10), None),
        (date(2025, 3, 9), None),
    ],
)
def test_extend_sets_or_collapses_the_end(controller, flight, drop, expected_end):
    controller.start_extend(flight)

    outcome = controller.drop(drop)

    assert outcome.accepted
    assert outcome.mutation.start_date == date(2025, 3, 10)
    assert outcome.mutation.end_date == expected_end


def test_extend_to_current_end_is_a_no_op(controller, flight):
    controller.start_extend(flight)
    assert not controller.drop(date(2025, 3, 15)).changed


def test_extend_single_day_on_its_start_is_a_no_op(controller, make_event):
    controller.start_extend(make_event(start=date(2025, 3, 10)))
    assert not controller.drop(date(2025, 3, 10)).changed


def test_extend_preview_tracks_pointer(controller, flight):
    controller.start_extend(flight)

    preview = controller.hover(date(2025, 3, 10), pointer_x=150.0, week_rect=WeekRect(left=100.0, width=700.0))

    assert preview.end_date is None
    assert controller.state.pointer_fraction() == pytest.approx(50 / 700)
    assert controller.hover(date(2025, 3, 15)) is None


def test_pointer_fraction_is_clamped(controller, flight):
    controller.start_extend(flight)
    controller.hover(date(2025, 3, 18), pointer_x=900.0, week_rect=WeekRect(left=100.0, width=700.0))
    assert controller.state.pointer_fraction() == 1.0


def test_cancel_returns_to_idle(controller, routing, flight):
    controller.start_extend(flight)
    controller.cancel()

    assert not controller.is_dragging
    assert routing.seen == [True, False]
    assert controller.drop(date(2025, 3, 20)).reason is RejectReason.NO_ACTIVE_DRAG


def test_starting_a_new_drag_discards_the_previous_one(controller, flight, make_event):
    deadline = make_event("deadline", EventCategory.DEADLINE, date(2025, 3, 1))
    controller.start_move(flight)
    controller.hover(date(2025, 3, 20))

    controller.start_extend(deadline)

    assert controller.mode is DragMode.EXTEND
    assert controller.state.subject is deadline
    assert controller.state.hover_date is None


def test_rejected_start_leaves_controller_idle(controller, routing, flight, make_event):
    controller.start_move(flight)
    assert controller.start_move(make_event(owner=None)) is False
    assert controller.state is None
    assert not routing.suspended
