"""
Tests for decoding Telegram updates into inbound events.
"""

from __future__ import annotations

from datetime import date

from roombot.application.dto.telegram_update import TelegramUpdateDTO
from roombot.domain.entities.inbound_event import (
    ButtonPress,
    CancelCommand,
    ChooseDate,
    HelpCommand,
    StartCommand,
    TextMessage,
)


def _message(text, chat_id=555, user_id=42, first_name="Ana"):
    return {
        "update_id": 1,
        "message": {
            "message_id": 10,
            "from": {"id": user_id, "first_name": first_name},
            "chat": {"id": chat_id, "type": "private"},
            "date": 1760000000,
            "text": text,
        },
    }


def test_start_command():
    event = TelegramUpdateDTO.model_validate(_message("/start")).extract_event()

    assert event == StartCommand(session_id="555", contact_id="42", display_name="Ana")


def test_command_with_bot_suffix():
    event = TelegramUpdateDTO.model_validate(_message("/start@RoomBot")).extract_event()

    assert isinstance(event, StartCommand)


def test_cancel_and_help_commands():
    assert TelegramUpdateDTO.model_validate(_message("/cancel")).extract_event() == CancelCommand("555")
    assert TelegramUpdateDTO.model_validate(_message("/HELP")).extract_event() == HelpCommand("555")


def test_unknown_command_is_dropped():
    assert TelegramUpdateDTO.model_validate(_message("/settings")).extract_event() is None


def test_plain_text():
    event = TelegramUpdateDTO.model_validate(_message("Budi Santoso")).extract_event()

    assert event == TextMessage(session_id="555", text="Budi Santoso")


def test_non_text_message_is_dropped():
    update = _message(None)
    update["message"].pop("text")
    update["message"]["photo"] = [{"file_id": "x"}]

    assert TelegramUpdateDTO.model_validate(update).extract_event() is None


def test_callback_query():
    update = {
        "update_id": 2,
        "callback_query": {
            "id": "cbq_1",
            "from": {"id": 42},
            "message": {"message_id": 77, "chat": {"id": 555}},
            "data": "d:tok1:2026-10-20",
        },
    }

    event = TelegramUpdateDTO.model_validate(update).extract_event()

    assert event == ButtonPress(
        session_id="555",
        message_id=77,
        callback_id="cbq_1",
        choice=ChooseDate("tok1", date(2026, 10, 20)),
    )


def test_callback_query_with_legacy_payload_is_still_acknowledged():
    update = {
        "update_id": 3,
        "callback_query": {
            "id": "cbq_2",
            "message": {"message_id": 77, "chat": {"id": 555}},
            "data": "date_2026-10-20",
        },
    }

    event = TelegramUpdateDTO.model_validate(update).extract_event()

    assert isinstance(event, ButtonPress)
    assert event.choice is None


def test_other_update_kinds_are_dropped():
    assert TelegramUpdateDTO.model_validate({"update_id": 4, "edited_message": {}}).extract_event() is None
