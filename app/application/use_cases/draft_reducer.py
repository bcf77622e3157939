from __future__ import annotations

from dataclasses import replace

from app.application.exceptions import FieldValidationError, InvalidTransitionError
from app.application.utils.state_helpers import reset_selection, start_selection
from app.domain.entities.booking_draft import BookingDraft, LessonDraft, TeoriDraft
from app.domain.entities.wizard_event import (
    GearChosen,
    GuestRegistered,
    LessonTypeChosen,
    NavigatedBack,
    SlotChosen,
    StudentChosen,
    SupervisorsSubmitted,
    TeoriLessonTypeChosen,
    TeoriSessionChosen,
    WizardEvent,
)
from app.domain.entities.wizard_step import WizardStep


def draft_reducer(draft: BookingDraft, event: WizardEvent) -> BookingDraft:
    """Apply one wizard event to the draft and return the new draft. Never mutates its input."""
    if isinstance(event, LessonTypeChosen):
        return start_selection(draft, LessonDraft(lesson_type=event.lesson_type))

    if isinstance(event, TeoriLessonTypeChosen):
        return start_selection(draft, TeoriDraft(lesson_type=event.lesson_type))

    if isinstance(event, SlotChosen):
        selection = _require_lesson(draft, event)
        return replace(
            draft,
            selection=replace(selection, selected_date=event.selected_date, selected_time=event.selected_time),
        )

    if isinstance(event, GearChosen):
        selection = _require_lesson(draft, event)
        return replace(draft, selection=replace(selection, transmission_type=event.transmission_type))

    if isinstance(event, TeoriSessionChosen):
        selection = _require_teori(draft, event)
        if selection.lesson_type.find_session(event.session.id) is None:
            raise FieldValidationError({"session_id": "Session does not belong to the chosen course"})
        return replace(draft, selection=replace(selection, session=event.session))

    if isinstance(event, StudentChosen):
        return replace(draft, student=event.student, guest=None)

    if isinstance(event, GuestRegistered):
        return replace(draft, guest=event.guest, student=None)

    if isinstance(event, SupervisorsSubmitted):
        if event.supervisors and not draft.allows_supervisors:
            raise FieldValidationError({"supervisors": "This lesson type does not allow supervisors"})
        return replace(draft, supervisors=tuple(event.supervisors))

    if isinstance(event, NavigatedBack):
        # Leaving the time/session step means the type gets picked again.
        if event.from_step in (WizardStep.driving_calendar, WizardStep.teori_sessions):
            return reset_selection(draft)
        return draft

    raise InvalidTransitionError(f"Unknown event {type(event).__name__}")


def _require_lesson(draft: BookingDraft, event: WizardEvent) -> LessonDraft:
    if not isinstance(draft.selection, LessonDraft):
        raise InvalidTransitionError(f"{type(event).__name__} needs a driving lesson draft")
    return draft.selection


def _require_teori(draft: BookingDraft, event: WizardEvent) -> TeoriDraft:
    if not isinstance(draft.selection, TeoriDraft):
        raise InvalidTransitionError(f"{type(event).__name__} needs a theory session draft")
    return draft.selection
