from __future__ import annotations

import threading
import time
from typing import Callable

from app.application.ports.draft_store import DraftStorePort
from app.domain.entities.wizard_session import WizardSession


class MemoryDraftStore(DraftStorePort):
    def __init__(self, ttl_minutes: int = 30, clock: Callable[[], float] = time.time) -> None:
        self._sessions: dict[str, WizardSession] = {}
        self._ttl_seconds = ttl_minutes * 60
        self._clock = clock
        self._lock = threading.Lock()

    def get(self, session_id: str) -> WizardSession | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if session.is_expired(self._clock(), self._ttl_seconds):
                del self._sessions[session_id]
                return None
            return session

    def put(self, session: WizardSession) -> None:
        with self._lock:
            self._sessions[session.id] = session

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def purge_expired(self) -> int:
        """Drop every expired draft. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [sid for sid, s in self._sessions.items() if s.is_expired(now, self._ttl_seconds)]
            for sid in expired:
                del self._sessions[sid]
        return len(expired)
