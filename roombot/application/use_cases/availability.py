from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from roombot.application.exceptions import CalendarProviderError
from roombot.application.ports.calendar import CalendarPort
from roombot.application.utils.prompts import text
from roombot.domain.entities.booking_draft import BookingDraft
from roombot.domain.entities.calendar_event import CalendarEvent, NewEvent
from roombot.domain.entities.schedule import Schedule

MAX_EVENTS_PER_QUERY = 250


@dataclass(frozen=True)
class BookingOutcome:
    success: bool
    detail: str | None = None
    event_id: str | None = None
    html_link: str | None = None


class AvailabilityUseCase:
    def __init__(
        self,
        calendar: CalendarPort,
        schedule: Schedule,
        language: str = "id",
        recheck_before_booking: bool = False,
    ) -> None:
        self._calendar = calendar
        self._schedule = schedule
        self._language = language
        self._recheck_before_booking = recheck_before_booking
        self._logger = logging.getLogger(__name__)

    def get_room_status(self, day: date, start_slot: int, end_slot: int) -> dict[str, bool]:
        """
        Map every configured room to True (free) or False (occupied) for the window.

        Calendar errors fail open: every room is reported free.
        """
        time_min = self._schedule.slot_datetime(day, start_slot)
        time_max = self._schedule.slot_datetime(day, end_slot)
        room_status = {room: True for room in self._schedule.rooms}

        try:
            events = self._calendar.list_events(time_min, time_max, max_results=MAX_EVENTS_PER_QUERY)
        except Exception as e:
            self._logger.warning(
                "Room status unverified, assuming all rooms are free",
                extra={
                    "availability": "unverified",
                    "error": str(e),
                    "error_code": getattr(e, "code", None),
                    "window": f"{time_min.isoformat()}/{time_max.isoformat()}",
                },
            )
            return {room: True for room in self._schedule.rooms}

        for event in events:
            room = self._match_room(event)
            if room is not None:
                room_status[room] = False

        self._logger.info(
            "Room status verified",
            extra={
                "availability": "verified",
                "event_count": len(events),
                "occupied": sum(1 for free in room_status.values() if not free),
                "window": f"{time_min.isoformat()}/{time_max.isoformat()}",
            },
        )
        return room_status

    def create_booking(self, draft: BookingDraft) -> BookingOutcome:
        if (
            draft.date is None
            or draft.start_slot is None
            or draft.end_slot is None
            or draft.room_index is None
        ):
            raise ValueError(f"Draft for session {draft.session_id} is incomplete")

        room = self._schedule.rooms[draft.room_index]

        if self._recheck_before_booking:
            status = self.get_room_status(draft.date, draft.start_slot, draft.end_slot)
            if not status.get(room, True):
                self._logger.info("Room taken before booking", extra={"room": room, "session_id": draft.session_id})
                return BookingOutcome(success=False, detail=text(self._language, "room_taken_detail", room=room))

        event = NewEvent(
            summary=f"{room} - {draft.display_name}",
            description=text(
                self._language,
                "event_description",
                name=draft.display_name,
                department=draft.department,
                agenda=draft.agenda,
                contact=draft.contact_id,
            ),
            location=room,
            start=self._schedule.slot_datetime(draft.date, draft.start_slot),
            end=self._schedule.slot_datetime(draft.date, draft.end_slot),
            timezone=self._schedule.timezone.key,
        )

        try:
            created = self._calendar.insert_event(event)
        except Exception as e:
            message = e.message if isinstance(e, CalendarProviderError) else str(e)
            self._logger.error(
                "Error creating booking",
                exc_info=True,
                extra={
                    "error": message,
                    "error_code": getattr(e, "code", None),
                    "room": room,
                    "session_id": draft.session_id,
                },
            )
            return BookingOutcome(
                success=False,
                detail=text(self._language, "create_failed_detail", message=message or "unknown API error"),
            )

        self._logger.info(
            "Booking created",
            extra={"event_id": created.id, "room": room, "session_id": draft.session_id},
        )
        return BookingOutcome(success=True, event_id=created.id, html_link=created.html_link)

    def _match_room(self, event: CalendarEvent) -> str | None:
        """Return the first room named in the event's location (or summary)."""
        occupied_location = event.location or event.summary
        if not occupied_location:
            return None
        haystack = occupied_location.lower()
        for room in self._schedule.rooms:
            if room.lower() in haystack:
                return room
        return None
