class CalendarProviderError(RuntimeError):
    """Raised when the calendar provider fails (HTTP error, network error, bad payload)."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class TelegramAPIError(RuntimeError):
    """Raised when the Telegram Bot API rejects a request."""

    def __init__(self, description: str, error_code: int | None = None) -> None:
        super().__init__(description)
        self.description = description
        self.error_code = error_code


class SessionExpiredError(LookupError):
    """Raised when an event arrives for a session without a live draft."""

    def __init__(self, session_id: str) -> None:
        super().__init__(session_id)
        self.session_id = session_id
