from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class Step(str, Enum):
    START = "start"
    SELECT_DATE = "select_date"
    SELECT_START_TIME = "select_start_time"
    SELECT_END_TIME = "select_end_time"
    VIEW_AVAILABILITY = "view_availability"
    ENTER_NAME = "enter_name"
    ENTER_DEPARTMENT = "enter_department"
    ENTER_AGENDA = "enter_agenda"
    COMPLETE = "complete"


@dataclass
class BookingDraft:
    session_id: str
    contact_id: str
    token: str
    step: Step = Step.START
    display_name: str | None = None
    department: str | None = None
    agenda: str | None = None
    date: date | None = None
    start_slot: int | None = None
    end_slot: int | None = None
    room_index: int | None = None
    available_rooms: tuple[int, ...] = ()  # rooms offered by the last availability view
    touched_at: float | None = None

    @property
    def duration_hours(self) -> int | None:
        if self.start_slot is None or self.end_slot is None:
            return None
        return self.end_slot - self.start_slot
