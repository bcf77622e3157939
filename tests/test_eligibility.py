"""
Tests for capacity and participant validation.
"""

from __future__ import annotations

import pytest

from app.application.exceptions import CapacityExceededError
from app.application.use_cases.eligibility import (
    EligibilityChecker,
    check_capacity,
    ensure_can_add_supervisor,
    supervisor_capacity,
    validate_registration,
)
from app.application.utils.validators import (
    is_valid_email,
    is_valid_personal_number,
    is_valid_phone,
    normalize_personal_number,
)
from app.domain.entities.booking_draft import BookingDraft, LessonDraft, TeoriDraft
from app.domain.entities.participants import ActingUser, GuestDetails, Role, Supervisor


def test_capacity_boundary(tight_session):
    """3 max, 1 taken: the participant plus exactly one supervisor fit."""
    assert tight_session.available_spots == 2
    assert supervisor_capacity(tight_session) == 1

    check_capacity(tight_session, 1)
    ensure_can_add_supervisor(tight_session, 0)

    with pytest.raises(CapacityExceededError) as exc:
        ensure_can_add_supervisor(tight_session, 1)
    assert exc.value.available_spots == 2
    assert "only 2 left" in str(exc.value)


def test_full_session_has_no_spots(full_session):
    with pytest.raises(CapacityExceededError) as exc:
        check_capacity(full_session, 0)
    assert str(exc.value) == "No spots available on this session"
    assert supervisor_capacity(full_session) == 0


def test_capacity_error_is_not_a_validation_error(full_session):
    with pytest.raises(CapacityExceededError) as exc:
        check_capacity(full_session, 0)
    assert not isinstance(exc.value, ValueError)


def test_supervisors_required_and_limited(handledarkurs, open_session):
    checker = EligibilityChecker(max_supervisors=5)
    draft = BookingDraft(selection=TeoriDraft(lesson_type=handledarkurs, session=open_session))

    assert checker.validate_supervisors(draft, ()) == {"supervisors": "Add at least one supervisor"}

    six = tuple(Supervisor(name=f"S {i}", email=f"s{i}@example.se", personal_number="19800101-1234") for i in range(6))
    assert checker.validate_supervisors(draft, six) == {"supervisors": "At most 5 supervisors are allowed"}
    assert checker.validate_supervisors(draft, six[:5]) == {}


def test_supervisor_fields_are_scoped(handledarkurs, open_session):
    checker = EligibilityChecker()
    draft = BookingDraft(selection=TeoriDraft(lesson_type=handledarkurs, session=open_session))
    errors = checker.validate_supervisors(
        draft,
        (
            Supervisor(name="Anna", email="anna@example.se", personal_number="19800101-1234"),
            Supervisor(name="", email="not-an-email", phone="", personal_number="123"),
        ),
    )

    assert set(errors) == {"supervisors.1.name", "supervisors.1.email", "supervisors.1.personal_number"}


def test_supervisor_needs_email_or_phone():
    errors = EligibilityChecker().validate_supervisor(Supervisor(name="Anna", personal_number="19800101-1234"), 0)
    assert set(errors) == {"supervisors.0.email", "supervisors.0.phone"}


def test_personal_number_optional_when_configured():
    checker = EligibilityChecker(personal_number_required=False)
    assert checker.validate_supervisor(Supervisor(name="Anna", phone="0701234567"), 0) == {}
    # still validated when given
    assert "supervisors.0.personal_number" in checker.validate_supervisor(
        Supervisor(name="Anna", phone="0701234567", personal_number="abc"), 0
    )


def test_supervisors_rejected_for_type_without_them(teorilektion, supervisors):
    draft = BookingDraft(selection=TeoriDraft(lesson_type=teorilektion, session=teorilektion.sessions[0]))
    errors = EligibilityChecker().validate_supervisors(draft, tuple(supervisors))
    assert list(errors) == ["supervisors"]


def test_registration_errors(guest):
    assert validate_registration(guest) == {}
    errors = validate_registration(GuestDetails("", " ", "x@", "12", "19801301-1234"))
    assert set(errors) == {"first_name", "last_name", "email", "phone", "personal_number"}


def test_check_draft_requires_participant(lesson_type, handledarkurs, open_session):
    checker = EligibilityChecker()
    draft = BookingDraft(selection=TeoriDraft(lesson_type=handledarkurs, session=open_session))

    assert "guest" in checker.check_draft(draft, None)
    assert "student" in checker.check_draft(draft, ActingUser(id="t", role=Role.teacher))
    assert checker.check_draft(draft, ActingUser(id="s", role=Role.student)) == {}


def test_check_draft_requires_lesson_details(lesson_type):
    errors = EligibilityChecker().check_draft(
        BookingDraft(selection=LessonDraft(lesson_type=lesson_type)),
        ActingUser(id="s", role=Role.student),
    )
    assert set(errors) == {"slot", "transmission_type"}
    assert EligibilityChecker().check_draft(BookingDraft(), None) == {"lesson_type": "Choose a lesson type"}


@pytest.mark.parametrize(
    "value,expected",
    [
        ("19800101-1234", True),
        ("198001011234", True),
        ("800101-1234", True),
        ("8001011234", True),
        ("19801301-1234", False),
        ("19800132-1234", False),
        ("1980011-1234", False),
        ("abc", False),
        ("", False),
    ],
)
def test_personal_number_format(value, expected):
    assert is_valid_personal_number(value) is expected


def test_normalize_personal_number():
    assert normalize_personal_number("198001011234") == "19800101-1234"
    assert normalize_personal_number("800101 1234") == "800101-1234"


def test_contact_validators():
    assert is_valid_email("anna@example.se")
    assert not is_valid_email("anna@example")
    assert is_valid_phone("+46 70-123 45 67")
    assert is_valid_phone("(070) 1234567")
    assert not is_valid_phone("070-12")
