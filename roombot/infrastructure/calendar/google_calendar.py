from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any
from urllib.parse import quote

import httpx
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from roombot.application.exceptions import CalendarProviderError
from roombot.application.ports.calendar import CalendarPort
from roombot.domain.entities.calendar_event import CalendarEvent, CreatedEvent, NewEvent

CALENDAR_SCOPES = ["https://www.googleapis.com/auth/calendar"]

# Reminders added to every booking.
REMINDER_OVERRIDES = [
    {"method": "email", "minutes": 24 * 60},
    {"method": "popup", "minutes": 10},
]


def load_service_account_credentials(
    key_file: str | None = None,
    credentials_json: str | None = None,
) -> service_account.Credentials:
    """Build service account credentials from a key file path or an inline JSON document."""
    if credentials_json:
        try:
            info = json.loads(credentials_json)
        except json.JSONDecodeError as e:
            raise ValueError("GOOGLE_SERVICE_ACCOUNT_CREDENTIALS is not valid JSON") from e
        return service_account.Credentials.from_service_account_info(info, scopes=CALENDAR_SCOPES)
    if key_file:
        return service_account.Credentials.from_service_account_file(key_file, scopes=CALENDAR_SCOPES)
    raise ValueError("Service account credentials are required (key file or inline JSON)")


class GoogleCalendar(CalendarPort):
    def __init__(
        self,
        credentials: Any,
        calendar_id: str = "primary",
        base_url: str = "https://www.googleapis.com/calendar/v3",
        timeout_seconds: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        if not calendar_id:
            raise ValueError("GOOGLE_CALENDAR_ID is required for Google Calendar")
        self._credentials = credentials
        self._calendar_id = calendar_id
        self._events_url = f"{base_url.rstrip('/')}/calendars/{quote(calendar_id, safe='')}/events"
        self._client = client or httpx.Client(timeout=timeout_seconds)
        self._logger = logging.getLogger(__name__)

    def list_events(self, time_min: datetime, time_max: datetime, max_results: int = 250) -> list[CalendarEvent]:
        params = {
            "timeMin": time_min.isoformat(),
            "timeMax": time_max.isoformat(),
            "singleEvents": "true",
            "maxResults": max_results,
        }
        data = self._request("GET", self._events_url, params=params)

        events: list[CalendarEvent] = []
        for item in data.get("items", []) or []:
            start = item.get("start") or {}
            end = item.get("end") or {}
            events.append(
                CalendarEvent(
                    summary=item.get("summary"),
                    location=item.get("location"),
                    start=start.get("dateTime") or start.get("date"),
                    end=end.get("dateTime") or end.get("date"),
                )
            )
        self._logger.debug("Calendar events listed", extra={"event_count": len(events)})
        return events

    def insert_event(self, event: NewEvent) -> CreatedEvent:
        body = {
            "summary": event.summary,
            "description": event.description,
            "location": event.location,
            "start": {"dateTime": event.start.isoformat(), "timeZone": event.timezone},
            "end": {"dateTime": event.end.isoformat(), "timeZone": event.timezone},
            "reminders": {"useDefault": False, "overrides": REMINDER_OVERRIDES},
        }
        data = self._request("POST", self._events_url, json=body)

        event_id = data.get("id")
        if not event_id:
            raise CalendarProviderError("No event ID returned from Google Calendar API")

        self._logger.info(
            "Calendar event created",
            extra={"event_id": event_id, "html_link": data.get("htmlLink"), "title": event.summary},
        )
        return CreatedEvent(id=str(event_id), html_link=data.get("htmlLink"))

    def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            headers = {"Authorization": f"Bearer {self._access_token()}"}
            resp = self._client.request(method, url, headers=headers, **kwargs)
        except CalendarProviderError:
            raise
        except httpx.HTTPError as e:
            self._logger.error("Calendar request failed", extra={"error": str(e), "method": method})
            raise CalendarProviderError(str(e)) from e
        except Exception as e:
            # google-auth refresh errors
            self._logger.error("Calendar authentication failed", extra={"error": str(e)})
            raise CalendarProviderError(f"Authentication failed: {e}") from e

        if resp.status_code >= 400:
            code, message = _parse_error(resp)
            self._logger.error(
                "Google Calendar API error",
                extra={"status": resp.status_code, "error_code": code, "error": message, "method": method},
            )
            if code == 403:
                self._logger.error("Share the calendar with the service account (make changes to events)")
            elif code == 404:
                self._logger.error("Calendar not found or not shared with the service account")
            raise CalendarProviderError(message, code=code)

        try:
            return resp.json()
        except ValueError as e:
            raise CalendarProviderError("Invalid JSON from Google Calendar API") from e

    def _access_token(self) -> str:
        if not self._credentials.valid:
            self._credentials.refresh(Request())
        return self._credentials.token


def _parse_error(resp: httpx.Response) -> tuple[int, str]:
    try:
        body = resp.json()
    except ValueError:
        return resp.status_code, resp.text or f"HTTP {resp.status_code}"
    error = (body.get("error") if isinstance(body, dict) else None) or {}
    if isinstance(error, str):
        return resp.status_code, error
    message = error.get("message")
    if not message:
        details = error.get("errors") or []
        message = details[0].get("message") if details else None
    return int(error.get("code") or resp.status_code), message or f"HTTP {resp.status_code}"
