"""
Wizard step transitions as pure functions of (step, draft, role[, event]).

Backward navigation is derived from the same rules as forward navigation,
run in reverse, so going back never lands on a step whose prerequisite
selection is missing from the draft.

A theory type without supervisors continues to the acting role's participant
step after the session is chosen, like every other lesson. Only staff ever
see student selection; anonymous users register as guests and students go
straight to confirmation.
"""

from __future__ import annotations

from app.application.exceptions import InvalidTransitionError
from app.domain.entities.booking_draft import BookingDraft, LessonDraft, TeoriDraft
from app.domain.entities.participants import STAFF_ROLES, Role
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


_FORWARD_EVENTS: dict[WizardStep, tuple[type, ...]] = {
    WizardStep.lesson_selection: (LessonTypeChosen, TeoriLessonTypeChosen),
    WizardStep.driving_calendar: (SlotChosen,),
    WizardStep.teori_sessions: (TeoriSessionChosen,),
    WizardStep.gear_selection: (GearChosen,),
    WizardStep.student_selection: (StudentChosen,),
    WizardStep.guest_registration: (GuestRegistered,),
    WizardStep.supervisor_management: (SupervisorsSubmitted,),
    WizardStep.confirmation: (),
}


def accepts(step: WizardStep, event: WizardEvent) -> bool:
    if isinstance(event, NavigatedBack):
        return event.from_step == step
    return isinstance(event, _FORWARD_EVENTS[step])


def participant_step(role: Role | None) -> WizardStep:
    """Where the flow goes once the lesson itself is fully chosen."""
    if role in STAFF_ROLES:
        return WizardStep.student_selection
    if role is None:
        return WizardStep.guest_registration
    return WizardStep.confirmation


def next_step(step: WizardStep, draft: BookingDraft, role: Role | None, event: WizardEvent) -> WizardStep:
    """Step after `event` was applied to the draft. `draft` is the already-reduced draft."""
    if not accepts(step, event):
        raise InvalidTransitionError(f"{type(event).__name__} is not valid at step {step.value}")

    if isinstance(event, NavigatedBack):
        return previous_step(step, draft, role)

    if step is WizardStep.lesson_selection:
        if isinstance(event, LessonTypeChosen):
            return WizardStep.driving_calendar
        return WizardStep.teori_sessions

    if step is WizardStep.driving_calendar:
        return WizardStep.gear_selection

    if step is WizardStep.teori_sessions:
        if draft.allows_supervisors:
            return WizardStep.supervisor_management
        return participant_step(role)

    if step in (WizardStep.gear_selection, WizardStep.supervisor_management):
        return participant_step(role)

    # student_selection, guest_registration
    return WizardStep.confirmation


def _lesson_origin(draft: BookingDraft) -> WizardStep:
    """The step that completed the lesson part of the draft."""
    selection = draft.selection
    if isinstance(selection, LessonDraft):
        return WizardStep.gear_selection
    if isinstance(selection, TeoriDraft):
        if selection.lesson_type.allows_supervisors:
            return WizardStep.supervisor_management
        return WizardStep.teori_sessions
    return WizardStep.lesson_selection


def previous_step(step: WizardStep, draft: BookingDraft, role: Role | None) -> WizardStep:
    if step in (WizardStep.lesson_selection, WizardStep.driving_calendar, WizardStep.teori_sessions):
        return WizardStep.lesson_selection

    if step is WizardStep.gear_selection:
        return WizardStep.driving_calendar

    if step is WizardStep.supervisor_management:
        return WizardStep.teori_sessions

    if step in (WizardStep.student_selection, WizardStep.guest_registration):
        return _lesson_origin(draft)

    # confirmation: undo whichever participant step led here
    participant = participant_step(role)
    if participant is WizardStep.confirmation:
        return _lesson_origin(draft)
    return participant
