from __future__ import annotations

import logging
from typing import Any

import httpx

from roombot.application.exceptions import TelegramAPIError

PARSE_MODE = "Markdown"


class TelegramClient:
    def __init__(
        self,
        bot_token: str,
        base_url: str = "https://api.telegram.org",
        timeout_seconds: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._endpoint = f"{base_url.rstrip('/')}/bot{bot_token}"
        self._timeout_seconds = timeout_seconds
        self._client = client or httpx.Client(timeout=timeout_seconds)
        self._logger = logging.getLogger(__name__)

    def send_message(self, chat_id: str, text: str, reply_markup: dict[str, Any] | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"chat_id": chat_id, "text": text, "parse_mode": PARSE_MODE}
        if reply_markup:
            payload["reply_markup"] = reply_markup
        return self._call("sendMessage", payload)

    def edit_message_text(
        self,
        chat_id: str,
        message_id: int,
        text: str,
        reply_markup: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        payload: dict[str, Any] = {
            "chat_id": chat_id,
            "message_id": message_id,
            "text": text,
            "parse_mode": PARSE_MODE,
        }
        if reply_markup:
            payload["reply_markup"] = reply_markup
        try:
            return self._call("editMessageText", payload)
        except TelegramAPIError as e:
            # A double tap re-renders identical content.
            if "message is not modified" in e.description.lower():
                self._logger.info("Edit skipped, message unchanged", extra={"chat_id": chat_id, "message_id": message_id})
                return None
            raise

    def answer_callback_query(self, callback_query_id: str, text: str | None = None) -> bool:
        payload: dict[str, Any] = {"callback_query_id": callback_query_id}
        if text:
            payload["text"] = text
        return bool(self._call("answerCallbackQuery", payload))

    def get_updates(self, offset: int | None = None, timeout: int = 30) -> list[dict[str, Any]]:
        payload: dict[str, Any] = {"timeout": timeout, "allowed_updates": ["message", "callback_query"]}
        if offset is not None:
            payload["offset"] = offset
        # The HTTP timeout must outlast the long poll.
        result = self._call("getUpdates", payload, timeout=timeout + self._timeout_seconds)
        return list(result or [])

    def set_webhook(self, url: str, secret_token: str | None = None) -> bool:
        payload: dict[str, Any] = {"url": url, "allowed_updates": ["message", "callback_query"]}
        if secret_token:
            payload["secret_token"] = secret_token
        return bool(self._call("setWebhook", payload))

    def delete_webhook(self) -> bool:
        return bool(self._call("deleteWebhook", {}))

    def _call(self, method: str, payload: dict[str, Any], timeout: float | None = None) -> Any:
        url = f"{self._endpoint}/{method}"
        if timeout is not None:
            resp = self._client.post(url, json=payload, timeout=timeout)
        else:
            resp = self._client.post(url, json=payload)

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if resp.status_code >= 400 or not data.get("ok", False):
            description = data.get("description") or resp.text or "Unknown Telegram API error"
            error_code = data.get("error_code") or resp.status_code
            self._logger.error(
                "Telegram API call failed",
                extra={
                    "method": method,
                    "status": resp.status_code,
                    "error_code": error_code,
                    "error": description,
                },
            )
            raise TelegramAPIError(description, error_code=error_code)

        return data.get("result")
