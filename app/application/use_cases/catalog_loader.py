from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, TypeVar

from app.application.exceptions import CatalogUnavailableError
from app.application.ports.catalog import CatalogPort
from app.domain.entities.catalog import LessonType, TeoriLessonType, TeoriSession

T = TypeVar("T")


@dataclass(frozen=True)
class CatalogLoadResult(Generic[T]):
    items: tuple[T, ...]
    notice: str | None = None  # non-fatal, shown to the user when the load failed

    @property
    def failed(self) -> bool:
        return self.notice is not None


class CatalogLoaderUseCase:
    """
    Reads the bookable catalog. Every call goes to the port; nothing is cached.
    A failed load yields an empty option set and a notice instead of an error.
    """

    def __init__(self, catalog: CatalogPort) -> None:
        self._catalog = catalog
        self._logger = logging.getLogger(__name__)

    def load_lesson_types(self) -> CatalogLoadResult[LessonType]:
        try:
            items = self._catalog.list_lesson_types()
        except CatalogUnavailableError as e:
            self._logger.warning("Could not load lesson types", extra={"reason": str(e)})
            return CatalogLoadResult(items=(), notice="Could not load lesson types")
        return CatalogLoadResult(items=tuple(items))

    def load_teori_lesson_types(self) -> CatalogLoadResult[TeoriLessonType]:
        try:
            items = self._catalog.list_teori_lesson_types()
        except CatalogUnavailableError as e:
            self._logger.warning("Could not load theory lesson types", extra={"reason": str(e)})
            return CatalogLoadResult(items=(), notice="Could not load theory lesson types")
        return CatalogLoadResult(items=tuple(items))


def bookable_sessions(lesson_type: TeoriLessonType, sort_by: str = "date") -> list[TeoriSession]:
    """Sessions with at least one free spot, by date/start time or by most free spots first."""
    sessions = [s for s in lesson_type.sessions if s.available_spots > 0]
    if sort_by == "spots":
        return sorted(sessions, key=lambda s: (-s.available_spots, s.date, s.start_time))
    if sort_by != "date":
        raise ValueError(f"Unknown sort order: {sort_by}")
    return sorted(sessions, key=lambda s: (s.date, s.start_time))
