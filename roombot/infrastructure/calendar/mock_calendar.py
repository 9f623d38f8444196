from __future__ import annotations

import logging
from datetime import datetime

from roombot.application.ports.calendar import CalendarPort
from roombot.domain.entities.calendar_event import CalendarEvent, CreatedEvent, NewEvent


class MockCalendar(CalendarPort):
    def __init__(self) -> None:
        self._events: dict[str, NewEvent] = {}
        self._logger = logging.getLogger(__name__)

    def list_events(self, time_min: datetime, time_max: datetime, max_results: int = 250) -> list[CalendarEvent]:
        overlapping = [
            CalendarEvent(
                summary=event.summary,
                location=event.location,
                start=event.start.isoformat(),
                end=event.end.isoformat(),
            )
            for event in sorted(self._events.values(), key=lambda e: e.start)
            if event.start < time_max and event.end > time_min
        ]
        return overlapping[:max_results]

    def insert_event(self, event: NewEvent) -> CreatedEvent:
        event_id = f"mock_event_{len(self._events) + 1}"
        self._events[event_id] = event
        self._logger.info(
            "Mock calendar event created",
            extra={
                "event_id": event_id,
                "start": event.start.isoformat(),
                "end": event.end.isoformat(),
                "title": event.summary,
            },
        )
        return CreatedEvent(id=event_id, html_link=None)
