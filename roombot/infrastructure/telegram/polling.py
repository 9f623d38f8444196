from __future__ import annotations

import logging
import time

import httpx
from pydantic import ValidationError

from roombot.application.dto.telegram_update import TelegramUpdateDTO
from roombot.application.exceptions import TelegramAPIError
from roombot.application.use_cases.handle_update import HandleUpdateUseCase
from roombot.infrastructure.telegram.telegram_client import TelegramClient


class TelegramPoller:
    """Long-polling delivery: fetches updates and handles them one after another."""

    def __init__(
        self,
        client: TelegramClient,
        use_case: HandleUpdateUseCase,
        poll_timeout_seconds: int = 30,
        error_backoff_seconds: float = 5.0,
    ) -> None:
        self._client = client
        self._use_case = use_case
        self._poll_timeout_seconds = poll_timeout_seconds
        self._error_backoff_seconds = error_backoff_seconds
        self._offset: int | None = None
        self._running = False
        self._logger = logging.getLogger(__name__)

    @property
    def offset(self) -> int | None:
        return self._offset

    def poll_once(self) -> int:
        """Fetch one batch of updates and handle them. Returns the number of updates seen."""
        updates = self._client.get_updates(offset=self._offset, timeout=self._poll_timeout_seconds)
        for raw in updates:
            update_id = raw.get("update_id")
            if isinstance(update_id, int):
                self._offset = update_id + 1
            try:
                event = TelegramUpdateDTO.model_validate(raw).extract_event()
            except ValidationError:
                self._logger.warning("Skipping malformed update", extra={"update_id": update_id})
                continue
            if event is None:
                continue
            self._use_case.handle(event)
        return len(updates)

    def run_forever(self) -> None:
        self._running = True
        self._client.delete_webhook()
        self._logger.info("Polling started")
        while self._running:
            try:
                self.poll_once()
            except (TelegramAPIError, httpx.HTTPError) as e:
                self._logger.error("Polling failed", extra={"error": str(e)})
                time.sleep(self._error_backoff_seconds)
            except Exception:
                self._logger.exception("Unexpected error while polling")
                time.sleep(self._error_backoff_seconds)

    def stop(self) -> None:
        self._running = False
