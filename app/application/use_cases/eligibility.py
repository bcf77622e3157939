from __future__ import annotations

import logging

from app.application.exceptions import CapacityExceededError
from app.application.utils.validators import is_valid_email, is_valid_personal_number, is_valid_phone
from app.domain.entities.booking_draft import BookingDraft, LessonDraft, TeoriDraft
from app.domain.entities.catalog import TeoriSession
from app.domain.entities.participants import ActingUser, GuestDetails, Supervisor


def supervisor_capacity(session: TeoriSession) -> int:
    """How many supervisors fit next to the primary participant."""
    return max(0, session.available_spots - 1)


def check_capacity(session: TeoriSession, supervisor_count: int) -> None:
    """Primary participant plus supervisors must fit in the spots left on the session."""
    needed = 1 + supervisor_count
    if needed > session.available_spots:
        if session.available_spots == 0:
            raise CapacityExceededError(0, "No spots available on this session")
        raise CapacityExceededError(
            session.available_spots,
            f"No spots available for {needed} participants: only {session.available_spots} left, "
            f"at most {supervisor_capacity(session)} supervisor(s) can be added",
        )


def ensure_can_add_supervisor(session: TeoriSession, current_count: int) -> None:
    """Raises CapacityExceededError when one more supervisor would not fit."""
    check_capacity(session, current_count + 1)


def validate_registration(details: GuestDetails) -> dict[str, str]:
    """Guest registration and new-student creation share these rules."""
    errors: dict[str, str] = {}
    if not details.first_name.strip():
        errors["first_name"] = "First name is required"
    if not details.last_name.strip():
        errors["last_name"] = "Last name is required"
    if not details.email.strip():
        errors["email"] = "Email is required"
    elif not is_valid_email(details.email):
        errors["email"] = "Invalid email address"
    if not details.phone.strip():
        errors["phone"] = "Phone number is required"
    elif not is_valid_phone(details.phone):
        errors["phone"] = "Invalid phone number"
    if not details.personal_number.strip():
        errors["personal_number"] = "Personal number is required"
    elif not is_valid_personal_number(details.personal_number):
        errors["personal_number"] = "Personal number must be YYYYMMDD-XXXX or YYMMDD-XXXX"
    return errors


class EligibilityChecker:
    def __init__(self, max_supervisors: int = 5, personal_number_required: bool = True) -> None:
        self._max_supervisors = max_supervisors
        self._personal_number_required = personal_number_required
        self._logger = logging.getLogger(__name__)

    def validate_supervisor(self, supervisor: Supervisor, index: int) -> dict[str, str]:
        prefix = f"supervisors.{index}"
        errors: dict[str, str] = {}
        email = supervisor.email.strip()
        phone = supervisor.phone.strip()
        personal_number = supervisor.personal_number.strip()

        if not supervisor.name.strip():
            errors[f"{prefix}.name"] = "Name is required"

        if not email and not phone:
            errors[f"{prefix}.email"] = "Either email or phone is required"
            errors[f"{prefix}.phone"] = "Either email or phone is required"
        if email and not is_valid_email(email):
            errors[f"{prefix}.email"] = "Invalid email address"
        if phone and not is_valid_phone(phone):
            errors[f"{prefix}.phone"] = "Invalid phone number"

        if not personal_number:
            if self._personal_number_required:
                errors[f"{prefix}.personal_number"] = "Personal number is required"
        elif not is_valid_personal_number(personal_number):
            errors[f"{prefix}.personal_number"] = "Personal number must be YYYYMMDD-XXXX or YYMMDD-XXXX"
        return errors

    def validate_supervisors(self, draft: BookingDraft, supervisors: tuple[Supervisor, ...]) -> dict[str, str]:
        """Field errors for a supervisor list about to be put on the draft. Capacity is checked separately."""
        if supervisors and not draft.allows_supervisors:
            return {"supervisors": "This lesson type does not allow supervisors"}
        if not supervisors:
            return {"supervisors": "Add at least one supervisor"}
        if len(supervisors) > self._max_supervisors:
            return {"supervisors": f"At most {self._max_supervisors} supervisors are allowed"}

        errors: dict[str, str] = {}
        for index, supervisor in enumerate(supervisors):
            errors.update(self.validate_supervisor(supervisor, index))
        return errors

    def check_draft(self, draft: BookingDraft, acting_user: ActingUser | None) -> dict[str, str]:
        """
        Everything that must hold before a draft may be confirmed, except capacity
        which raises CapacityExceededError from check_capacity.
        """
        errors: dict[str, str] = {}
        selection = draft.selection
        if selection is None:
            return {"lesson_type": "Choose a lesson type"}

        if isinstance(selection, LessonDraft):
            if selection.selected_date is None or selection.selected_time is None:
                errors["slot"] = "Choose a date and time"
            if selection.transmission_type is None:
                errors["transmission_type"] = "Choose manual or automatic"
        elif isinstance(selection, TeoriDraft) and selection.session is None:
            errors["session"] = "Choose a session"

        if draft.supervisors:
            if not draft.allows_supervisors:
                errors["supervisors"] = "This lesson type does not allow supervisors"
            elif len(draft.supervisors) > self._max_supervisors:
                errors["supervisors"] = f"At most {self._max_supervisors} supervisors are allowed"
            else:
                for index, supervisor in enumerate(draft.supervisors):
                    errors.update(self.validate_supervisor(supervisor, index))

        if acting_user is None:
            if draft.guest is None:
                errors["guest"] = "Guest details are required"
            else:
                errors.update(validate_registration(draft.guest))
        elif acting_user.is_staff and draft.student is None:
            errors["student"] = "Choose a student"

        if errors:
            self._logger.info("Draft not eligible", extra={"reason": ",".join(sorted(errors))})
        return errors
