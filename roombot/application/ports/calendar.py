from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from roombot.domain.entities.calendar_event import CalendarEvent, CreatedEvent, NewEvent


class CalendarPort(ABC):
    @abstractmethod
    def list_events(self, time_min: datetime, time_max: datetime, max_results: int = 250) -> list[CalendarEvent]:
        """List single (expanded) events overlapping [time_min, time_max)."""
        raise NotImplementedError

    @abstractmethod
    def insert_event(self, event: NewEvent) -> CreatedEvent:
        """Create calendar event. Raises CalendarProviderError on failure."""
        raise NotImplementedError
