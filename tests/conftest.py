from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from roombot.application.exceptions import CalendarProviderError
from roombot.application.ports.calendar import CalendarPort
from roombot.application.use_cases.availability import AvailabilityUseCase
from roombot.application.use_cases.conversation import ConversationUseCase
from roombot.domain.entities.calendar_event import CalendarEvent, CreatedEvent, NewEvent
from roombot.domain.entities.schedule import Schedule
from roombot.infrastructure.store.memory_store import MemorySessionStore

TZ = ZoneInfo("Asia/Jakarta")
NOW = datetime(2026, 10, 19, 9, 30, tzinfo=TZ)
TOKEN = "tok1"


class FakeCalendar(CalendarPort):
    def __init__(self) -> None:
        self.events: list[CalendarEvent] = []
        self.list_error: Exception | None = None
        self.insert_error: Exception | None = None
        self.list_calls: list[tuple[datetime, datetime, int]] = []
        self.inserted: list[NewEvent] = []

    def list_events(self, time_min: datetime, time_max: datetime, max_results: int = 250) -> list[CalendarEvent]:
        self.list_calls.append((time_min, time_max, max_results))
        if self.list_error is not None:
            raise self.list_error
        return list(self.events)

    def insert_event(self, event: NewEvent) -> CreatedEvent:
        if self.insert_error is not None:
            raise self.insert_error
        self.inserted.append(event)
        return CreatedEvent(id=f"evt_{len(self.inserted)}", html_link="https://calendar.example/evt")


@pytest.fixture
def schedule() -> Schedule:
    return Schedule(rooms=("Room A", "Room B"), time_slots=("08:00", "09:00", "10:00"), timezone=TZ)


@pytest.fixture
def calendar() -> FakeCalendar:
    return FakeCalendar()


@pytest.fixture
def store() -> MemorySessionStore:
    return MemorySessionStore(ttl_seconds=600)


@pytest.fixture
def availability(calendar: FakeCalendar, schedule: Schedule) -> AvailabilityUseCase:
    return AvailabilityUseCase(calendar=calendar, schedule=schedule, language="en")


@pytest.fixture
def conversation(store: MemorySessionStore, availability: AvailabilityUseCase, schedule: Schedule) -> ConversationUseCase:
    return ConversationUseCase(
        store=store,
        availability=availability,
        schedule=schedule,
        language="en",
        clock=lambda: NOW,
        token_factory=lambda: TOKEN,
    )


def provider_error(message: str = "Not Found", code: int | None = 404) -> CalendarProviderError:
    return CalendarProviderError(message, code=code)
