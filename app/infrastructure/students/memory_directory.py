from __future__ import annotations

import uuid

from app.application.exceptions import BookingRejectedError
from app.application.ports.student_directory import StudentDirectoryPort
from app.application.use_cases.student_lookup import matches_query
from app.domain.entities.participants import GuestDetails, Student


class MemoryStudentDirectory(StudentDirectoryPort):
    def __init__(self, students: list[Student] | None = None) -> None:
        self._students: dict[str, Student] = {s.id: s for s in students or []}

    def search_students(self, query: str) -> list[Student]:
        found = [s for s in self._students.values() if matches_query(s, query)]
        return sorted(found, key=lambda s: (s.last_name.lower(), s.first_name.lower()))

    def get_student(self, student_id: str) -> Student | None:
        return self._students.get(student_id)

    def create_student(self, details: GuestDetails) -> Student:
        if any(s.email.lower() == details.email.lower() for s in self._students.values()):
            raise BookingRejectedError("A student with this email already exists")
        student = Student(
            id=uuid.uuid4().hex,
            first_name=details.first_name,
            last_name=details.last_name,
            email=details.email,
            phone=details.phone,
            personal_number=details.personal_number,
        )
        self._students[student.id] = student
        return student
