from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from roombot.application.utils.callback_data import decode_choice
from roombot.domain.entities.inbound_event import (
    ButtonPress,
    CancelCommand,
    HelpCommand,
    InboundEvent,
    StartCommand,
    TextMessage,
)


class TelegramUpdateDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    update_id: int
    message: dict[str, Any] | None = None
    callback_query: dict[str, Any] | None = None

    def extract_event(self) -> InboundEvent | None:
        """Decode the update into a typed inbound event. Unsupported updates yield None."""
        if self.callback_query:
            return _button_press(self.callback_query)
        if self.message:
            return _message_event(self.message)
        return None


def _button_press(query: dict[str, Any]) -> InboundEvent | None:
    callback_id = query.get("id")
    message = query.get("message") or {}
    chat_id = (message.get("chat") or {}).get("id")
    if not (callback_id and chat_id is not None):
        return None

    message_id = message.get("message_id")
    return ButtonPress(
        session_id=str(chat_id),
        message_id=int(message_id) if message_id is not None else None,
        callback_id=str(callback_id),
        choice=decode_choice(query.get("data")),
    )


def _message_event(message: dict[str, Any]) -> InboundEvent | None:
    text = message.get("text")
    chat_id = (message.get("chat") or {}).get("id")
    sender = message.get("from") or {}
    if not text or chat_id is None:
        return None

    session_id = str(chat_id)
    stripped = text.strip()
    if not stripped.startswith("/"):
        return TextMessage(session_id=session_id, text=text)

    # "/start@MyRoomBot payload" -> "/start"
    command = stripped.split(maxsplit=1)[0].split("@", 1)[0].lower()
    if command == "/start":
        contact = sender.get("id", chat_id)
        return StartCommand(
            session_id=session_id,
            contact_id=str(contact),
            display_name=sender.get("first_name"),
        )
    if command == "/cancel":
        return CancelCommand(session_id=session_id)
    if command == "/help":
        return HelpCommand(session_id=session_id)
    return None
