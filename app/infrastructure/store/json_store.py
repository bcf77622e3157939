from __future__ import annotations

import logging
import re
import threading
import time
from pathlib import Path
from typing import Callable

from pydantic import TypeAdapter, ValidationError

from app.application.ports.draft_store import DraftStorePort
from app.domain.entities.wizard_session import WizardSession

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class JsonDraftStore(DraftStorePort):
    """One JSON file per wizard draft, written atomically via a temp file."""

    def __init__(
        self,
        data_dir: str = "./data/drafts",
        ttl_minutes: int = 30,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._ttl_seconds = ttl_minutes * 60
        self._clock = clock
        self._adapter = TypeAdapter(WizardSession)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, session_id: str) -> threading.Lock:
        with self._lock_lock:
            if session_id not in self._locks:
                self._locks[session_id] = threading.Lock()
            return self._locks[session_id]

    def _forget_lock(self, session_id: str) -> None:
        with self._lock_lock:
            self._locks.pop(session_id, None)

    def _get_file_path(self, session_id: str) -> Path:
        if not _SAFE_ID.match(session_id):
            raise ValueError(f"Invalid draft id: {session_id!r}")
        return self._data_dir / f"{session_id}.json"

    def _load(self, session_id: str, file_path: Path) -> WizardSession | None:
        """Read a draft, deleting the file when it is unreadable or expired."""
        with self._get_lock(session_id):
            if not file_path.exists():
                return None
            try:
                session = self._adapter.validate_json(file_path.read_bytes())
            except (OSError, ValidationError) as e:
                # Unreadable drafts are treated as gone
                self._logger.warning("Discarding unreadable draft", extra={"wizard_id": session_id, "reason": str(e)})
                file_path.unlink(missing_ok=True)
                return None

            if session.is_expired(self._clock(), self._ttl_seconds):
                file_path.unlink(missing_ok=True)
                return None
            return session

    def get(self, session_id: str) -> WizardSession | None:
        try:
            file_path = self._get_file_path(session_id)
        except ValueError:
            return None

        session = self._load(session_id, file_path)
        if session is None:
            self._forget_lock(session_id)
        return session

    def put(self, session: WizardSession) -> None:
        file_path = self._get_file_path(session.id)
        temp_path = file_path.with_suffix(".json.tmp")

        with self._get_lock(session.id):
            try:
                temp_path.write_bytes(self._adapter.dump_json(session, indent=2))
                temp_path.replace(file_path)
            except OSError:
                temp_path.unlink(missing_ok=True)
                raise

    def delete(self, session_id: str) -> None:
        file_path = self._get_file_path(session_id)
        with self._get_lock(session_id):
            file_path.unlink(missing_ok=True)
        self._forget_lock(session_id)

    def purge_expired(self) -> int:
        removed = 0
        for file_path in self._data_dir.glob("*.json"):
            session_id = file_path.stem
            if not _SAFE_ID.match(session_id):
                continue
            if self._load(session_id, file_path) is None:
                self._forget_lock(session_id)
                removed += 1
        if removed:
            self._logger.info("Expired drafts purged", extra={"reason": f"count={removed}"})
        return removed
