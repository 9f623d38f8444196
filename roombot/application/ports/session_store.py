from abc import ABC, abstractmethod

from roombot.domain.entities.booking_draft import BookingDraft


class SessionStorePort(ABC):
    @abstractmethod
    def get(self, session_id: str, now_ts: float | None = None) -> BookingDraft | None:
        """Return the live draft for a session, or None when absent or expired."""
        raise NotImplementedError

    @abstractmethod
    def put(self, draft: BookingDraft, now_ts: float | None = None) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def purge_expired(self, now_ts: float | None = None) -> int:
        """Drop expired drafts. Returns how many were removed."""
        raise NotImplementedError
