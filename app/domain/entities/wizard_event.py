from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time

from app.domain.entities.booking_draft import TransmissionType
from app.domain.entities.catalog import LessonType, TeoriLessonType, TeoriSession
from app.domain.entities.participants import GuestDetails, Student, Supervisor
from app.domain.entities.wizard_step import WizardStep


@dataclass(frozen=True)
class LessonTypeChosen:
    lesson_type: LessonType


@dataclass(frozen=True)
class TeoriLessonTypeChosen:
    lesson_type: TeoriLessonType


@dataclass(frozen=True)
class SlotChosen:
    selected_date: date
    selected_time: time


@dataclass(frozen=True)
class TeoriSessionChosen:
    session: TeoriSession


@dataclass(frozen=True)
class GearChosen:
    transmission_type: TransmissionType


@dataclass(frozen=True)
class StudentChosen:
    student: Student


@dataclass(frozen=True)
class GuestRegistered:
    guest: GuestDetails


@dataclass(frozen=True)
class SupervisorsSubmitted:
    supervisors: tuple[Supervisor, ...]


@dataclass(frozen=True)
class NavigatedBack:
    from_step: WizardStep


WizardEvent = (
    LessonTypeChosen
    | TeoriLessonTypeChosen
    | SlotChosen
    | TeoriSessionChosen
    | GearChosen
    | StudentChosen
    | GuestRegistered
    | SupervisorsSubmitted
    | NavigatedBack
)
