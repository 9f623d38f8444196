from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CalendarEvent:
    summary: str | None = None
    location: str | None = None
    start: str | None = None
    end: str | None = None


@dataclass(frozen=True)
class NewEvent:
    summary: str
    description: str
    location: str
    start: datetime
    end: datetime
    timezone: str


@dataclass(frozen=True)
class CreatedEvent:
    id: str
    html_link: str | None = None
