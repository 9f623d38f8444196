from __future__ import annotations

import threading
import time

from roombot.application.ports.session_store import SessionStorePort
from roombot.domain.entities.booking_draft import BookingDraft


class MemorySessionStore(SessionStorePort):
    """
    In-process draft store. Drafts idle for longer than ttl_seconds are evicted.

    Expired drafts are dropped when read, and swept from the whole store on
    write at most once per TTL interval.
    """

    def __init__(self, ttl_seconds: float = 3600.0) -> None:
        self._drafts: dict[str, BookingDraft] = {}
        self._ttl_seconds = ttl_seconds
        self._lock = threading.Lock()
        self._last_sweep: float | None = None

    def get(self, session_id: str, now_ts: float | None = None) -> BookingDraft | None:
        now_ts = time.time() if now_ts is None else now_ts
        with self._lock:
            draft = self._drafts.get(session_id)
            if draft is None:
                return None
            if self._is_expired(draft, now_ts):
                del self._drafts[session_id]
                return None
            return draft

    def put(self, draft: BookingDraft, now_ts: float | None = None) -> None:
        now_ts = time.time() if now_ts is None else now_ts
        draft.touched_at = now_ts
        with self._lock:
            self._drafts[draft.session_id] = draft
            if self._last_sweep is None:
                self._last_sweep = now_ts
            elif now_ts - self._last_sweep >= self._ttl_seconds:
                self._purge_locked(now_ts)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._drafts.pop(session_id, None)

    def purge_expired(self, now_ts: float | None = None) -> int:
        now_ts = time.time() if now_ts is None else now_ts
        with self._lock:
            return self._purge_locked(now_ts)

    def __len__(self) -> int:
        with self._lock:
            return len(self._drafts)

    def _purge_locked(self, now_ts: float) -> int:
        expired = [sid for sid, draft in self._drafts.items() if self._is_expired(draft, now_ts)]
        for sid in expired:
            del self._drafts[sid]
        self._last_sweep = now_ts
        return len(expired)

    def _is_expired(self, draft: BookingDraft, now_ts: float) -> bool:
        if draft.touched_at is None:
            return False
        return now_ts - draft.touched_at > self._ttl_seconds
