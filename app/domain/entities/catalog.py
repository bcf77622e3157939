from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal


@dataclass(frozen=True)
class LessonType:
    id: str
    name: str
    duration_minutes: int
    price: Decimal
    description: str | None = None
    price_student: Decimal | None = None
    allows_supervisors: bool = False
    price_per_supervisor: Decimal | None = None


@dataclass(frozen=True)
class TeoriSession:
    id: str
    title: str
    date: date
    start_time: time
    end_time: time
    max_participants: int
    current_participants: int
    price: Decimal
    price_per_supervisor: Decimal | None = None
    description: str | None = None

    @property
    def available_spots(self) -> int:
        return max(0, self.max_participants - self.current_participants)


@dataclass(frozen=True)
class TeoriLessonType:
    id: str
    name: str
    allows_supervisors: bool
    price: Decimal
    duration_minutes: int
    max_participants: int
    description: str | None = None
    price_per_supervisor: Decimal | None = None
    sessions: tuple[TeoriSession, ...] = ()

    def find_session(self, session_id: str) -> TeoriSession | None:
        for session in self.sessions:
            if session.id == session_id:
                return session
        return None
