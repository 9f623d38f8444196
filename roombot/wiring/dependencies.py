from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from roombot.application.ports.calendar import CalendarPort
from roombot.application.ports.message_platform import MessagePlatformPort
from roombot.application.use_cases.availability import AvailabilityUseCase
from roombot.application.use_cases.conversation import ConversationUseCase
from roombot.application.use_cases.handle_update import HandleUpdateUseCase
from roombot.core.config import settings
from roombot.domain.entities.schedule import Schedule
from roombot.infrastructure.calendar.google_calendar import GoogleCalendar, load_service_account_credentials
from roombot.infrastructure.calendar.mock_calendar import MockCalendar
from roombot.infrastructure.store.memory_store import MemorySessionStore
from roombot.infrastructure.telegram.mock_platform import MockTelegramPlatform
from roombot.infrastructure.telegram.telegram_client import TelegramClient
from roombot.infrastructure.telegram.telegram_platform import TelegramPlatform


logger = logging.getLogger(__name__)


@lru_cache
def get_schedule() -> Schedule:
    return Schedule(
        rooms=tuple(settings.ROOMS),
        time_slots=tuple(settings.TIME_SLOTS),
        timezone=ZoneInfo(settings.BUSINESS_TIMEZONE),
    )


@lru_cache
def get_session_store() -> MemorySessionStore:
    return MemorySessionStore(ttl_seconds=settings.SESSION_TTL_SECONDS)


@lru_cache
def get_calendar() -> CalendarPort:
    has_credentials = bool(settings.GOOGLE_SERVICE_ACCOUNT_FILE or settings.GOOGLE_SERVICE_ACCOUNT_CREDENTIALS)
    if not has_credentials:
        if settings.is_dev:
            logger.info("Using MockCalendar (credentials missing, ENV=%s)", settings.ENV)
            return MockCalendar()
        raise ValueError("Google service account credentials are required outside dev/local.")

    credentials = load_service_account_credentials(
        key_file=settings.GOOGLE_SERVICE_ACCOUNT_FILE,
        credentials_json=settings.GOOGLE_SERVICE_ACCOUNT_CREDENTIALS,
    )
    logger.info("Using GoogleCalendar calendar_id=%s", settings.GOOGLE_CALENDAR_ID)
    return GoogleCalendar(
        credentials=credentials,
        calendar_id=settings.GOOGLE_CALENDAR_ID,
        base_url=settings.CALENDAR_BASE_URL,
        timeout_seconds=settings.CALENDAR_TIMEOUT_SECONDS,
    )


@lru_cache
def get_telegram_client() -> TelegramClient:
    if not settings.TELEGRAM_BOT_TOKEN:
        raise ValueError("TELEGRAM_BOT_TOKEN is required to talk to Telegram.")
    return TelegramClient(
        bot_token=settings.TELEGRAM_BOT_TOKEN,
        base_url=settings.TELEGRAM_API_BASE_URL,
        timeout_seconds=settings.TELEGRAM_TIMEOUT_SECONDS,
    )


@lru_cache
def get_message_platform() -> MessagePlatformPort:
    logger.info("TELEGRAM_BOT_TOKEN present=%s ENV=%s", bool(settings.TELEGRAM_BOT_TOKEN), settings.ENV)
    if not settings.TELEGRAM_BOT_TOKEN:
        if settings.is_dev:
            logger.info("Using MockTelegramPlatform (token missing, ENV=dev/local)")
            return MockTelegramPlatform()
        raise ValueError("TELEGRAM_BOT_TOKEN is required to send Telegram replies.")
    return TelegramPlatform(client=get_telegram_client())


def get_availability_use_case() -> AvailabilityUseCase:
    return AvailabilityUseCase(
        calendar=get_calendar(),
        schedule=get_schedule(),
        language=settings.LANGUAGE,
        recheck_before_booking=settings.BOOKING_RECHECK_AVAILABILITY,
    )


@lru_cache
def get_conversation_use_case() -> ConversationUseCase:
    return ConversationUseCase(
        store=get_session_store(),
        availability=get_availability_use_case(),
        schedule=get_schedule(),
        language=settings.LANGUAGE,
    )


@lru_cache
def get_handle_update_use_case() -> HandleUpdateUseCase:
    # Cached: the per-session locks must be shared by every request.
    return HandleUpdateUseCase(
        conversation=get_conversation_use_case(),
        platform=get_message_platform(),
    )
