from __future__ import annotations

from app.application.ports.catalog import CatalogPort
from app.domain.entities.catalog import LessonType, TeoriLessonType
from app.infrastructure.catalog.seed_data import LESSON_TYPES, TEORI_LESSON_TYPES


class StaticCatalog(CatalogPort):
    """In-process catalog for dev/local runs and tests."""

    def __init__(
        self,
        lesson_types: list[LessonType] | None = None,
        teori_lesson_types: list[TeoriLessonType] | None = None,
    ) -> None:
        self._lesson_types = list(LESSON_TYPES if lesson_types is None else lesson_types)
        self._teori_lesson_types = list(TEORI_LESSON_TYPES if teori_lesson_types is None else teori_lesson_types)

    def list_lesson_types(self) -> list[LessonType]:
        return list(self._lesson_types)

    def list_teori_lesson_types(self) -> list[TeoriLessonType]:
        return list(self._teori_lesson_types)
