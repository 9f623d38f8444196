"""
Tests for room availability aggregation and booking creation.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from conftest import TZ, provider_error

from roombot.application.use_cases.availability import MAX_EVENTS_PER_QUERY, AvailabilityUseCase
from roombot.domain.entities.booking_draft import BookingDraft, Step
from roombot.domain.entities.calendar_event import CalendarEvent
from roombot.domain.entities.schedule import Schedule

DAY = date(2026, 10, 20)


def _complete_draft(**overrides) -> BookingDraft:
    values = dict(
        session_id="chat_1",
        contact_id="42",
        token="tok1",
        step=Step.COMPLETE,
        display_name="Ana",
        department="Ops",
        agenda="Sync",
        date=DAY,
        start_slot=0,
        end_slot=2,
        room_index=1,
    )
    values.update(overrides)
    return BookingDraft(**values)


def test_all_rooms_free_without_events(availability):
    """Scenario A: no existing events."""
    assert availability.get_room_status(DAY, 0, 2) == {"Room A": True, "Room B": True}


def test_query_window_uses_slot_hours_in_timezone(availability, calendar):
    availability.get_room_status(DAY, 0, 2)

    time_min, time_max, max_results = calendar.list_calls[0]
    assert time_min == datetime(2026, 10, 20, 8, 0, tzinfo=TZ)
    assert time_max == datetime(2026, 10, 20, 10, 0, tzinfo=TZ)
    assert max_results == MAX_EVENTS_PER_QUERY == 250


def test_event_location_marks_room_occupied(availability, calendar):
    """Scenario B: an event located in Room A."""
    calendar.events = [CalendarEvent(location="Room A", summary="Weekly")]

    assert availability.get_room_status(DAY, 0, 2) == {"Room A": False, "Room B": True}


def test_summary_used_when_location_missing(availability, calendar):
    calendar.events = [CalendarEvent(summary="room b - Budi")]

    assert availability.get_room_status(DAY, 0, 1) == {"Room A": True, "Room B": False}


def test_location_takes_precedence_over_summary(availability, calendar):
    calendar.events = [CalendarEvent(location="Room B", summary="Room A - moved")]

    assert availability.get_room_status(DAY, 0, 1) == {"Room A": True, "Room B": False}


def test_event_matching_no_room_is_ignored(availability, calendar):
    calendar.events = [CalendarEvent(location="Auditorium"), CalendarEvent(summary="Lunch")]

    assert availability.get_room_status(DAY, 0, 1) == {"Room A": True, "Room B": True}


def test_event_without_location_or_summary_is_skipped(availability, calendar):
    calendar.events = [CalendarEvent(), CalendarEvent(location="", summary=None)]

    assert availability.get_room_status(DAY, 0, 1) == {"Room A": True, "Room B": True}


def test_event_occupies_at_most_one_room(availability, calendar):
    """An event mentioning several rooms only occupies the first configured one."""
    calendar.events = [CalendarEvent(location="Room B and Room A")]

    assert availability.get_room_status(DAY, 0, 1) == {"Room A": False, "Room B": True}


def test_calendar_error_fails_open(availability, calendar, caplog):
    """Scenario C: the calendar query throws."""
    calendar.list_error = provider_error("Backend Error", 500)

    with caplog.at_level(logging.WARNING):
        status = availability.get_room_status(DAY, 0, 2)

    assert status == {"Room A": True, "Room B": True}
    assert any(getattr(r, "availability", None) == "unverified" for r in caplog.records)


def test_unexpected_error_also_fails_open(availability, calendar):
    calendar.list_error = RuntimeError("socket closed")

    assert availability.get_room_status(DAY, 0, 2) == {"Room A": True, "Room B": True}


def test_status_has_one_entry_per_room_for_many_events(calendar):
    rooms = ("Alpha", "Bravo", "Charlie")
    schedule = Schedule(rooms=rooms, time_slots=("08:00", "09:00"), timezone=TZ)
    use_case = AvailabilityUseCase(calendar=calendar, schedule=schedule, language="en")
    calendar.events = [CalendarEvent(location="BRAVO")] * 5 + [CalendarEvent(summary="unrelated")]

    status = use_case.get_room_status(DAY, 0, 1)

    assert list(status) == list(rooms)
    assert status == {"Alpha": True, "Bravo": False, "Charlie": True}


def test_create_booking_builds_event(availability, calendar):
    outcome = availability.create_booking(_complete_draft())

    assert outcome.success is True
    assert outcome.event_id == "evt_1"
    event = calendar.inserted[0]
    assert event.summary == "Room B - Ana"
    assert event.location == "Room B"
    assert event.start == datetime(2026, 10, 20, 8, 0, tzinfo=TZ)
    assert event.end == datetime(2026, 10, 20, 10, 0, tzinfo=TZ)
    assert event.timezone == "Asia/Jakarta"
    for expected in ("Ana", "Ops", "Sync", "42"):
        assert expected in event.description


def test_create_booking_failure_carries_provider_message(availability, calendar):
    calendar.insert_error = provider_error("Forbidden", 403)

    outcome = availability.create_booking(_complete_draft())

    assert outcome.success is False
    assert "Forbidden" in outcome.detail
    assert calendar.inserted == []


def test_create_booking_does_not_recheck_by_default(availability, calendar):
    calendar.events = [CalendarEvent(location="Room B")]

    outcome = availability.create_booking(_complete_draft())

    assert outcome.success is True
    assert calendar.list_calls == []


def test_create_booking_recheck_rejects_taken_room(calendar, schedule):
    use_case = AvailabilityUseCase(calendar=calendar, schedule=schedule, language="en", recheck_before_booking=True)
    calendar.events = [CalendarEvent(location="Room B")]

    outcome = use_case.create_booking(_complete_draft())

    assert outcome.success is False
    assert "Room B" in outcome.detail
    assert calendar.inserted == []
