from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.catalog import LessonType, TeoriLessonType


class CatalogPort(ABC):
    @abstractmethod
    def list_lesson_types(self) -> list[LessonType]:
        """List active driving-lesson types. Raises CatalogUnavailableError on failure."""
        raise NotImplementedError

    @abstractmethod
    def list_teori_lesson_types(self) -> list[TeoriLessonType]:
        """List active theory lesson types with their open sessions. Raises CatalogUnavailableError on failure."""
        raise NotImplementedError
