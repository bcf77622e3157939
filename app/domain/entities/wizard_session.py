from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.booking_draft import BookingDraft
from app.domain.entities.catalog import LessonType, TeoriLessonType
from app.domain.entities.participants import ActingUser, Role
from app.domain.entities.wizard_step import WizardStep


@dataclass(frozen=True)
class WizardSession:
    id: str
    acting_user: ActingUser | None = None
    step: WizardStep = WizardStep.lesson_selection
    draft: BookingDraft = BookingDraft()
    # Catalog snapshot from the most recent load; later steps pick by id from here.
    lesson_types: tuple[LessonType, ...] = ()
    teori_lesson_types: tuple[TeoriLessonType, ...] = ()
    terms_accepted: bool = False
    booking_id: str | None = None
    created_at: float | None = None
    updated_at: float | None = None

    @property
    def role(self) -> Role | None:
        return self.acting_user.role if self.acting_user else None

    def find_lesson_type(self, lesson_type_id: str) -> LessonType | None:
        return next((lt for lt in self.lesson_types if lt.id == lesson_type_id), None)

    def find_teori_lesson_type(self, lesson_type_id: str) -> TeoriLessonType | None:
        return next((lt for lt in self.teori_lesson_types if lt.id == lesson_type_id), None)

    def is_expired(self, now: float, ttl_seconds: float) -> bool:
        touched = self.updated_at or self.created_at
        if touched is None or ttl_seconds <= 0:
            return False
        return now - touched > ttl_seconds
