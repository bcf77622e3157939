from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.participants import GuestDetails, Student


class StudentDirectoryPort(ABC):
    @abstractmethod
    def search_students(self, query: str) -> list[Student]:
        """Match by first/last name, email or personal number. Empty query lists everyone."""
        raise NotImplementedError

    @abstractmethod
    def get_student(self, student_id: str) -> Student | None:
        raise NotImplementedError

    @abstractmethod
    def create_student(self, details: GuestDetails) -> Student:
        """Create a student record. Raises BookingRejectedError with the backend's message on refusal."""
        raise NotImplementedError
