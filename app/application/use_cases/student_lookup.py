from __future__ import annotations

import logging

from app.application.exceptions import FieldValidationError
from app.application.ports.student_directory import StudentDirectoryPort
from app.application.use_cases.eligibility import validate_registration
from app.application.utils.validators import normalize_personal_number
from app.domain.entities.participants import GuestDetails, Student


class StudentLookupUseCase:
    """Staff-side student search and creation used by the student selection step."""

    def __init__(self, directory: StudentDirectoryPort) -> None:
        self._directory = directory
        self._logger = logging.getLogger(__name__)

    def search(self, query: str | None) -> list[Student]:
        return self._directory.search_students((query or "").strip())

    def get(self, student_id: str) -> Student | None:
        return self._directory.get_student(student_id)

    def create(self, details: GuestDetails) -> Student:
        errors = validate_registration(details)
        if errors:
            raise FieldValidationError(errors)
        normalized = GuestDetails(
            first_name=details.first_name.strip(),
            last_name=details.last_name.strip(),
            email=details.email.strip().lower(),
            phone=details.phone.strip(),
            personal_number=normalize_personal_number(details.personal_number),
        )
        student = self._directory.create_student(normalized)
        self._logger.info("Student created", extra={"reason": f"student_id={student.id}"})
        return student


def matches_query(student: Student, query: str) -> bool:
    """Case-insensitive match on name or email, substring match on personal number."""
    if not query:
        return True
    needle = query.lower()
    return (
        needle in student.first_name.lower()
        or needle in student.last_name.lower()
        or needle in student.email.lower()
        or (student.personal_number is not None and query in student.personal_number)
    )
