from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

import httpx

from roombot.application.exceptions import TelegramAPIError
from roombot.application.ports.message_platform import MessagePlatformPort
from roombot.application.use_cases.conversation import ConversationUseCase
from roombot.domain.entities.inbound_event import ButtonPress, InboundEvent
from roombot.domain.entities.reply import Reply


class HandleUpdateUseCase:
    """
    Runs one inbound event through the conversation and delivers the reply.

    Events for the same session are processed one at a time; webhook
    background tasks may otherwise run them concurrently.
    """

    def __init__(self, conversation: ConversationUseCase, platform: MessagePlatformPort) -> None:
        self._conversation = conversation
        self._platform = platform
        # session id -> (lock, number of events holding or waiting on it)
        self._locks: dict[str, tuple[threading.Lock, int]] = {}
        self._lock_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def active_sessions(self) -> int:
        with self._lock_lock:
            return len(self._locks)

    @contextmanager
    def _session_lock(self, session_id: str) -> Iterator[None]:
        with self._lock_lock:
            lock, users = self._locks.get(session_id, (None, 0))
            if lock is None:
                lock = threading.Lock()
            self._locks[session_id] = (lock, users + 1)
        try:
            with lock:
                yield
        finally:
            with self._lock_lock:
                held, users = self._locks[session_id]
                if users <= 1:
                    del self._locks[session_id]
                else:
                    self._locks[session_id] = (held, users - 1)

    def handle(self, event: InboundEvent) -> Reply | None:
        with self._session_lock(event.session_id):
            reply = self._conversation.handle(event)
            if reply is not None:
                self._deliver(event.session_id, reply)
            if isinstance(event, ButtonPress):
                self._answer(event.callback_id)
            return reply

    def _deliver(self, chat_id: str, reply: Reply) -> None:
        try:
            if reply.edit_message_id is not None:
                self._platform.edit_message(chat_id, reply.edit_message_id, reply)
            else:
                self._platform.send_message(chat_id, reply)
            self._logger.info(
                "Reply sent",
                extra={"session_id": chat_id, "edited": reply.edit_message_id is not None},
            )
        except (TelegramAPIError, httpx.HTTPError) as e:
            self._logger.error(
                "Failed to deliver reply",
                exc_info=True,
                extra={"session_id": chat_id, "error": str(e)},
            )

    def _answer(self, callback_id: str) -> None:
        try:
            self._platform.answer_callback(callback_id)
        except (TelegramAPIError, httpx.HTTPError) as e:
            self._logger.warning("Failed to answer callback", extra={"callback_id": callback_id, "error": str(e)})
