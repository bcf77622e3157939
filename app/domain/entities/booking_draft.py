from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Literal

from app.domain.entities.catalog import LessonType, TeoriLessonType, TeoriSession
from app.domain.entities.participants import GuestDetails, Student, Supervisor


class TransmissionType(str, Enum):
    manual = "manual"
    automatic = "automatic"


@dataclass(frozen=True)
class LessonDraft:
    lesson_type: LessonType
    selected_date: date | None = None
    selected_time: time | None = None
    transmission_type: TransmissionType | None = None
    kind: Literal["lesson"] = "lesson"


@dataclass(frozen=True)
class TeoriDraft:
    lesson_type: TeoriLessonType
    session: TeoriSession | None = None
    kind: Literal["teori"] = "teori"


@dataclass(frozen=True)
class BookingDraft:
    selection: LessonDraft | TeoriDraft | None = None
    student: Student | None = None
    guest: GuestDetails | None = None
    supervisors: tuple[Supervisor, ...] = ()
    total_price: Decimal | None = None

    @property
    def mode(self) -> str | None:
        return self.selection.kind if self.selection else None

    @property
    def lesson_type(self) -> LessonType | None:
        return self.selection.lesson_type if isinstance(self.selection, LessonDraft) else None

    @property
    def teori_lesson_type(self) -> TeoriLessonType | None:
        return self.selection.lesson_type if isinstance(self.selection, TeoriDraft) else None

    @property
    def teori_session(self) -> TeoriSession | None:
        return self.selection.session if isinstance(self.selection, TeoriDraft) else None

    @property
    def allows_supervisors(self) -> bool:
        return bool(self.selection and self.selection.lesson_type.allows_supervisors)
