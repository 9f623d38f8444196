from __future__ import annotations

import dataclasses
import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Union

from roombot.application.exceptions import SessionExpiredError
from roombot.application.ports.session_store import SessionStorePort
from roombot.application.use_cases.availability import AvailabilityUseCase
from roombot.application.utils.callback_data import encode_choice
from roombot.application.utils.prompts import date_long_label, date_short_label, sanitize_markdown, text
from roombot.domain.entities.booking_draft import BookingDraft, Step
from roombot.domain.entities.inbound_event import (
    BeginDateSelection,
    ButtonPress,
    CancelCommand,
    ChooseDate,
    ChooseEndSlot,
    ChooseRoom,
    ChooseStartSlot,
    HelpCommand,
    InboundEvent,
    StartCommand,
    TextMessage,
)
from roombot.domain.entities.reply import Button, Reply
from roombot.domain.entities.schedule import Schedule

DATE_CHOICES = 7
COMMAND_PREFIX = "/"
DEFAULT_DISPLAY_NAME = "User"

TurnEvent = Union[ButtonPress, TextMessage]
StepHandler = Callable[[BookingDraft, TurnEvent], "Reply | None"]


class ConversationUseCase:
    """
    Per-session booking state machine.

    Walks a user through date, start time, end time, room, name, department
    and agenda, then hands the finished draft to the availability use case.
    The engine keys off the draft's current step only; events that do not fit
    the current step are ignored.
    """

    def __init__(
        self,
        store: SessionStorePort,
        availability: AvailabilityUseCase,
        schedule: Schedule,
        language: str = "id",
        clock: Callable[[], datetime] | None = None,
        token_factory: Callable[[], str] | None = None,
    ) -> None:
        self._store = store
        self._availability = availability
        self._schedule = schedule
        self._language = language
        self._clock = clock or (lambda: datetime.now(schedule.timezone))
        self._token_factory = token_factory or (lambda: secrets.token_hex(4))
        self._logger = logging.getLogger(__name__)
        self._transitions: dict[Step, StepHandler] = {
            Step.START: self._on_start,
            Step.SELECT_DATE: self._on_select_date,
            Step.SELECT_START_TIME: self._on_select_start_time,
            Step.SELECT_END_TIME: self._on_select_end_time,
            Step.VIEW_AVAILABILITY: self._on_view_availability,
            Step.ENTER_NAME: self._on_enter_name,
            Step.ENTER_DEPARTMENT: self._on_enter_department,
            Step.ENTER_AGENDA: self._on_enter_agenda,
            Step.COMPLETE: self._on_complete,
        }

    @property
    def transitions(self) -> dict[Step, StepHandler]:
        return dict(self._transitions)

    def handle(self, event: InboundEvent) -> Reply | None:
        """Process one inbound event and return the reply to render, if any."""
        draft = self._store.get(event.session_id)
        snapshot = dataclasses.replace(draft) if draft is not None else None
        try:
            return self._dispatch(event, draft)
        except SessionExpiredError as e:
            self._logger.info("Event for expired session", extra={"session_id": e.session_id})
            return Reply(text=text(self._language, "session_expired"))
        except Exception:
            self._logger.exception(
                "Error processing event",
                extra={
                    "session_id": event.session_id,
                    "step": draft.step.value if draft else None,
                    "event": type(event).__name__,
                },
            )
            if snapshot is not None:
                self._store.put(snapshot)
            return Reply(text=text(self._language, "processing_error"))

    def _dispatch(self, event: InboundEvent, draft: BookingDraft | None) -> Reply | None:
        if isinstance(event, StartCommand):
            return self._start_session(event)
        if isinstance(event, HelpCommand):
            return Reply(text=text(self._language, "help"))
        if draft is None:
            raise SessionExpiredError(event.session_id)
        if isinstance(event, CancelCommand):
            self._store.delete(event.session_id)
            self._logger.info("Session cancelled", extra={"session_id": event.session_id, "step": draft.step.value})
            return Reply(text=text(self._language, "cancelled"))

        if isinstance(event, ButtonPress):
            if event.choice is None:
                return None
            if event.choice.token != draft.token:
                self._logger.info(
                    "Stale button ignored",
                    extra={"session_id": event.session_id, "step": draft.step.value},
                )
                return None

        return self._transitions[draft.step](draft, event)

    def _start_session(self, event: StartCommand) -> Reply:
        draft = BookingDraft(
            session_id=event.session_id,
            contact_id=event.contact_id,
            token=self._token_factory(),
            display_name=event.display_name or DEFAULT_DISPLAY_NAME,
        )
        self._store.put(draft)
        self._logger.info("Session started", extra={"session_id": event.session_id})
        return Reply(
            text=text(self._language, "welcome"),
            buttons=(
                (Button(text(self._language, "choose_date_button"), encode_choice(BeginDateSelection(draft.token))),),
            ),
        )

    # --- transitions ---

    def _on_start(self, draft: BookingDraft, event: TurnEvent) -> Reply | None:
        if not _is_choice(event, BeginDateSelection):
            return None
        draft.step = Step.SELECT_DATE
        self._store.put(draft)

        today = self._clock().date()
        rows = []
        for offset in range(DATE_CHOICES):
            day = today + timedelta(days=offset)
            payload = encode_choice(ChooseDate(draft.token, day))
            rows.append((Button(date_short_label(day, self._language), payload),))
        return self._render(event, text(self._language, "choose_date"), rows)

    def _on_select_date(self, draft: BookingDraft, event: TurnEvent) -> Reply | None:
        choice = _is_choice(event, ChooseDate)
        if not choice:
            return None
        draft.date = choice.date
        draft.step = Step.SELECT_START_TIME
        self._store.put(draft)

        rows = [
            (Button(self._schedule.time_slots[i], encode_choice(ChooseStartSlot(draft.token, i))),)
            for i in self._schedule.start_slot_indices()
        ]
        body = text(self._language, "choose_start", date=date_long_label(choice.date, self._language))
        return self._render(event, body, rows)

    def _on_select_start_time(self, draft: BookingDraft, event: TurnEvent) -> Reply | None:
        choice = _is_choice(event, ChooseStartSlot)
        if not choice or not self._schedule.is_valid_start(choice.index):
            return None
        draft.start_slot = choice.index
        draft.step = Step.SELECT_END_TIME
        self._store.put(draft)

        rows = []
        for i in self._schedule.end_slot_indices(choice.index):
            label = text(
                self._language,
                "end_button",
                time=self._schedule.time_slots[i],
                hours=i - choice.index,
            )
            rows.append((Button(label, encode_choice(ChooseEndSlot(draft.token, i))),))
        body = text(
            self._language,
            "choose_end",
            date=date_long_label(draft.date, self._language),
            start=self._schedule.time_slots[choice.index],
        )
        return self._render(event, body, rows)

    def _on_select_end_time(self, draft: BookingDraft, event: TurnEvent) -> Reply | None:
        choice = _is_choice(event, ChooseEndSlot)
        if not choice or not self._schedule.is_valid_end(draft.start_slot, choice.index):
            return None
        draft.end_slot = choice.index
        draft.step = Step.VIEW_AVAILABILITY

        room_status = self._availability.get_room_status(draft.date, draft.start_slot, draft.end_slot)

        lines = [
            text(
                self._language,
                "availability_header",
                date=date_long_label(draft.date, self._language),
                window=self._schedule.window_label(draft.start_slot, draft.end_slot),
                hours=draft.duration_hours,
            )
        ]
        rows = []
        available: list[int] = []
        for index, room in enumerate(self._schedule.rooms):
            if room_status[room]:
                lines.append(text(self._language, "room_available", room=room))
                available.append(index)
                label = text(self._language, "book_button", room=room)
                rows.append((Button(label, encode_choice(ChooseRoom(draft.token, index))),))
            else:
                lines.append(text(self._language, "room_occupied", room=room))
        lines.append("")
        lines.append(text(self._language, "availability_footer" if available else "no_rooms"))

        draft.available_rooms = tuple(available)
        self._store.put(draft)
        return self._render(event, "\n".join(lines), rows)

    def _on_view_availability(self, draft: BookingDraft, event: TurnEvent) -> Reply | None:
        choice = _is_choice(event, ChooseRoom)
        if not choice or choice.index not in draft.available_rooms:
            return None
        draft.room_index = choice.index
        draft.step = Step.ENTER_NAME
        self._store.put(draft)
        return Reply(text=text(self._language, "ask_name"))

    def _on_enter_name(self, draft: BookingDraft, event: TurnEvent) -> Reply | None:
        value = _free_text(event)
        if value is None:
            return None
        if not value:
            return Reply(text=text(self._language, "ask_name"))
        draft.display_name = value
        draft.step = Step.ENTER_DEPARTMENT
        self._store.put(draft)
        return Reply(text=text(self._language, "ask_department"))

    def _on_enter_department(self, draft: BookingDraft, event: TurnEvent) -> Reply | None:
        value = _free_text(event)
        if value is None:
            return None
        if not value:
            return Reply(text=text(self._language, "ask_department"))
        draft.department = value
        draft.step = Step.ENTER_AGENDA
        self._store.put(draft)
        return Reply(text=text(self._language, "ask_agenda"))

    def _on_enter_agenda(self, draft: BookingDraft, event: TurnEvent) -> Reply | None:
        value = _free_text(event)
        if value is None:
            return None
        if not value:
            return Reply(text=text(self._language, "ask_agenda"))
        draft.agenda = value
        draft.step = Step.COMPLETE
        return self._complete(draft)

    def _on_complete(self, draft: BookingDraft, event: TurnEvent) -> Reply | None:
        # Terminal: the draft is removed as soon as the booking call returns.
        return None

    def _complete(self, draft: BookingDraft) -> Reply:
        outcome = self._availability.create_booking(draft)
        self._store.delete(draft.session_id)

        if not outcome.success:
            detail = sanitize_markdown(outcome.detail or "")
            return Reply(text=text(self._language, "booking_failed", detail=detail))

        return Reply(
            text=text(
                self._language,
                "confirmation",
                date=date_long_label(draft.date, self._language),
                room=self._schedule.rooms[draft.room_index],
                window=self._schedule.window_label(draft.start_slot, draft.end_slot),
                hours=draft.duration_hours,
                name=sanitize_markdown(draft.display_name or ""),
                department=sanitize_markdown(draft.department or ""),
                agenda=sanitize_markdown(draft.agenda or ""),
            )
        )

    def _render(self, event: TurnEvent, body: str, rows: list[tuple[Button, ...]]) -> Reply:
        message_id = event.message_id if isinstance(event, ButtonPress) else None
        return Reply(text=body, buttons=tuple(rows), edit_message_id=message_id)


def _is_choice(event: TurnEvent, choice_type: type):
    if isinstance(event, ButtonPress) and isinstance(event.choice, choice_type):
        return event.choice
    return None


def _free_text(event: TurnEvent) -> str | None:
    """Stripped reply text, or None when the event is not a free-text message."""
    if not isinstance(event, TextMessage) or event.text.startswith(COMMAND_PREFIX):
        return None
    return event.text.strip()
