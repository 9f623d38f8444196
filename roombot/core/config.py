import re

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ROOMS = [
    "Meeting Room A",
    "Meeting Room B",
    "Meeting Room C",
    "Meeting Room D",
    "Meeting Room E",
    "Meeting Room F",
    "Meeting Room G",
    "Meeting Room H",
]

# The last slot is the closing time: valid as an end time only.
DEFAULT_TIME_SLOTS = [
    "08:00",
    "09:00",
    "10:00",
    "11:00",
    "12:00",
    "13:00",
    "14:00",
    "15:00",
    "16:00",
    "17:00",
]

_SLOT_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
# Room names are shown inside Telegram Markdown entities.
_MARKDOWN_CHARS = ("_", "*", "`", "[")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    TELEGRAM_BOT_TOKEN: str | None = None
    TELEGRAM_WEBHOOK_SECRET: str | None = None
    TELEGRAM_API_BASE_URL: str = "https://api.telegram.org"
    TELEGRAM_TIMEOUT_SECONDS: float = 10.0
    TELEGRAM_POLL_TIMEOUT_SECONDS: int = 30

    GOOGLE_SERVICE_ACCOUNT_FILE: str | None = None
    GOOGLE_SERVICE_ACCOUNT_CREDENTIALS: str | None = None
    GOOGLE_CALENDAR_ID: str = "primary"
    CALENDAR_BASE_URL: str = "https://www.googleapis.com/calendar/v3"
    CALENDAR_TIMEOUT_SECONDS: float = 10.0

    ROOMS: list[str] = DEFAULT_ROOMS
    TIME_SLOTS: list[str] = DEFAULT_TIME_SLOTS
    BUSINESS_TIMEZONE: str = "Asia/Jakarta"
    LANGUAGE: str = "id"

    SESSION_TTL_SECONDS: int = 3600
    BOOKING_RECHECK_AVAILABILITY: bool = False

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    @field_validator("ROOMS")
    @classmethod
    def _validate_rooms(cls, rooms: list[str]) -> list[str]:
        cleaned = [room.strip() for room in rooms]
        if not cleaned or any(not room for room in cleaned):
            raise ValueError("ROOMS must contain at least one non-empty room name")
        for room in cleaned:
            if any(char in room for char in _MARKDOWN_CHARS):
                raise ValueError(f"Room name {room!r} must not contain Markdown characters (_ * ` [)")
        lowered = [room.lower() for room in cleaned]
        if len(set(lowered)) != len(lowered):
            raise ValueError("ROOMS must not contain duplicates")
        # Availability is a substring match on event location, so "Room A"
        # would also match events booked for "Room A Annex".
        for i, name in enumerate(lowered):
            for j, other in enumerate(lowered):
                if i != j and name in other:
                    raise ValueError(f"Room name {cleaned[i]!r} is contained in {cleaned[j]!r}")
        return cleaned

    @field_validator("TIME_SLOTS")
    @classmethod
    def _validate_time_slots(cls, slots: list[str]) -> list[str]:
        if len(slots) < 2:
            raise ValueError("TIME_SLOTS needs at least a start slot and a closing slot")
        hours: list[int] = []
        for slot in slots:
            if not _SLOT_PATTERN.match(slot):
                raise ValueError(f"Invalid time slot {slot!r}, expected HH:MM")
            hours.append(int(slot.split(":", 1)[0]))
        if any(later <= earlier for earlier, later in zip(hours, hours[1:])):
            raise ValueError("TIME_SLOTS hours must be strictly increasing")
        return slots

    @field_validator("LANGUAGE")
    @classmethod
    def _validate_language(cls, language: str) -> str:
        normalized = language.strip().lower()
        if normalized not in {"id", "en"}:
            raise ValueError("LANGUAGE must be 'id' or 'en'")
        return normalized

    @property
    def is_dev(self) -> bool:
        return self.ENV.lower() in {"dev", "local"}


settings = Settings()
