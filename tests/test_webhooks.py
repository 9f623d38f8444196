"""
Tests for the Telegram webhook endpoint.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from roombot.core.config import settings
from roombot.domain.entities.inbound_event import TextMessage
from roombot.main import app

SECRET = "s3cret"


class RecordingUseCase:
    def __init__(self) -> None:
        self.events = []

    def handle(self, event):
        self.events.append(event)
        return None


@pytest.fixture
def use_case(monkeypatch) -> RecordingUseCase:
    recorder = RecordingUseCase()
    monkeypatch.setattr("roombot.api.webhooks.get_handle_update_use_case", lambda: recorder)
    monkeypatch.setattr(settings, "TELEGRAM_WEBHOOK_SECRET", SECRET)
    monkeypatch.setattr(settings, "ENV", "prod")
    return recorder


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _post(client, payload, secret=SECRET):
    headers = {"X-Telegram-Bot-Api-Secret-Token": secret} if secret else {}
    return client.post("/webhooks/telegram", json=payload, headers=headers)


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_wrong_secret_is_rejected(client, use_case):
    resp = _post(client, {"update_id": 1}, secret="nope")

    assert resp.status_code == 403
    assert use_case.events == []


def test_missing_secret_is_rejected_outside_dev(client, use_case):
    resp = _post(client, {"update_id": 1}, secret=None)

    assert resp.status_code == 403


def test_invalid_body_is_rejected(client, use_case):
    resp = client.post(
        "/webhooks/telegram",
        content=b"{not json",
        headers={"X-Telegram-Bot-Api-Secret-Token": SECRET, "Content-Type": "application/json"},
    )

    assert resp.status_code == 400


def test_update_without_id_is_rejected(client, use_case):
    assert _post(client, {"message": {"text": "hi"}}).status_code == 400


def test_text_message_is_handled_in_background(client, use_case):
    payload = {
        "update_id": 7,
        "message": {"message_id": 3, "from": {"id": 42}, "chat": {"id": 555}, "text": "Ana"},
    }

    resp = _post(client, payload)

    assert resp.status_code == 200
    assert use_case.events == [TextMessage(session_id="555", text="Ana")]


def test_unsupported_update_is_acknowledged(client, use_case):
    resp = _post(client, {"update_id": 8, "edited_message": {"message_id": 3}})

    assert resp.status_code == 200
    assert use_case.events == []


def test_missing_secret_accepted_in_dev(client, use_case, monkeypatch):
    monkeypatch.setattr(settings, "TELEGRAM_WEBHOOK_SECRET", None)
    monkeypatch.setattr(settings, "ENV", "dev")

    resp = _post(client, {"update_id": 9, "message": {"chat": {"id": 1}, "text": "x"}}, secret=None)

    assert resp.status_code == 200
    assert len(use_case.events) == 1
