from __future__ import annotations

import logging

from roombot.application.ports.message_platform import MessagePlatformPort
from roombot.domain.entities.reply import Reply


class MockTelegramPlatform(MessagePlatformPort):
    def __init__(self) -> None:
        self.sent: list[tuple[str, int | None, Reply]] = []
        self.answered: list[str] = []
        self._logger = logging.getLogger(__name__)

    def send_message(self, chat_id: str, reply: Reply) -> None:
        self.sent.append((chat_id, None, reply))
        self._logger.info("Mock send to Telegram", extra={"chat_id": chat_id, "reply_text": reply.text})

    def edit_message(self, chat_id: str, message_id: int, reply: Reply) -> None:
        self.sent.append((chat_id, message_id, reply))
        self._logger.info(
            "Mock edit on Telegram",
            extra={"chat_id": chat_id, "message_id": message_id, "reply_text": reply.text},
        )

    def answer_callback(self, callback_id: str) -> None:
        self.answered.append(callback_id)
