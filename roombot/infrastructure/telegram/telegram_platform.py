from __future__ import annotations

from typing import Any

from roombot.application.ports.message_platform import MessagePlatformPort
from roombot.domain.entities.reply import Reply
from roombot.infrastructure.telegram.telegram_client import TelegramClient


class TelegramPlatform(MessagePlatformPort):
    def __init__(self, client: TelegramClient) -> None:
        self._client = client

    def send_message(self, chat_id: str, reply: Reply) -> None:
        self._client.send_message(chat_id=chat_id, text=reply.text, reply_markup=inline_keyboard(reply))

    def edit_message(self, chat_id: str, message_id: int, reply: Reply) -> None:
        self._client.edit_message_text(
            chat_id=chat_id,
            message_id=message_id,
            text=reply.text,
            reply_markup=inline_keyboard(reply),
        )

    def answer_callback(self, callback_id: str) -> None:
        self._client.answer_callback_query(callback_id)


def inline_keyboard(reply: Reply) -> dict[str, Any] | None:
    if not reply.buttons:
        return None
    return {
        "inline_keyboard": [
            [{"text": button.label, "callback_data": button.payload} for button in row]
            for row in reply.buttons
        ]
    }
