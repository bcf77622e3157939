from __future__ import annotations

import datetime as dt
import logging
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.domain.entities.catalog import LessonType, TeoriLessonType, TeoriSession


logger = logging.getLogger(__name__)


class _CatalogRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)


class LessonTypeDTO(_CatalogRecord):
    id: str
    name: str
    description: str | None = None
    duration_minutes: int = Field(alias="durationMinutes", gt=0)
    price: Decimal = Field(ge=0)
    price_student: Decimal | None = Field(default=None, alias="priceStudent", ge=0)
    allows_supervisors: bool = Field(default=False, alias="allowsSupervisors")
    price_per_supervisor: Decimal | None = Field(default=None, alias="pricePerSupervisor", ge=0)
    is_active: bool = Field(default=True, alias="isActive")

    def to_entity(self) -> LessonType:
        return LessonType(
            id=self.id,
            name=self.name,
            description=self.description,
            duration_minutes=self.duration_minutes,
            price=self.price,
            price_student=self.price_student,
            allows_supervisors=self.allows_supervisors,
            price_per_supervisor=self.price_per_supervisor,
        )


class TeoriSessionDTO(_CatalogRecord):
    id: str
    title: str
    description: str | None = None
    date: dt.date
    start_time: dt.time = Field(alias="startTime")
    end_time: dt.time = Field(alias="endTime")
    max_participants: int = Field(alias="maxParticipants", ge=0)
    current_participants: int = Field(default=0, alias="currentParticipants", ge=0)
    price: Decimal = Field(ge=0)
    price_per_supervisor: Decimal | None = Field(default=None, alias="pricePerSupervisor", ge=0)
    is_active: bool = Field(default=True, alias="isActive")

    def to_entity(self) -> TeoriSession:
        return TeoriSession(
            id=self.id,
            title=self.title,
            description=self.description,
            date=self.date,
            start_time=self.start_time,
            end_time=self.end_time,
            max_participants=self.max_participants,
            current_participants=self.current_participants,
            price=self.price,
            price_per_supervisor=self.price_per_supervisor,
        )


class TeoriLessonTypeDTO(_CatalogRecord):
    id: str
    name: str
    description: str | None = None
    allows_supervisors: bool = Field(default=False, alias="allowsSupervisors")
    price: Decimal = Field(ge=0)
    price_per_supervisor: Decimal | None = Field(default=None, alias="pricePerSupervisor", ge=0)
    duration_minutes: int = Field(alias="durationMinutes", gt=0)
    max_participants: int = Field(alias="maxParticipants", ge=0)
    is_active: bool = Field(default=True, alias="isActive")
    sessions: list[dict[str, Any]] = Field(default_factory=list)

    def to_entity(self) -> TeoriLessonType:
        return TeoriLessonType(
            id=self.id,
            name=self.name,
            description=self.description,
            allows_supervisors=self.allows_supervisors,
            price=self.price,
            price_per_supervisor=self.price_per_supervisor,
            duration_minutes=self.duration_minutes,
            max_participants=self.max_participants,
            sessions=tuple(s.to_entity() for s in parse_records(self.sessions, TeoriSessionDTO)),
        )


def parse_records(raw: Any, dto_cls: type[_CatalogRecord]) -> list[Any]:
    """Validate a list of raw records, dropping malformed and inactive ones."""
    records = []
    if not isinstance(raw, list):
        logger.warning("Catalog payload is not a list", extra={"reason": type(raw).__name__})
        return records
    for item in raw:
        try:
            record = dto_cls.model_validate(item)
        except ValidationError as e:
            logger.warning(
                "Dropping malformed catalog record",
                extra={"reason": f"{dto_cls.__name__}: {e.error_count()} error(s)"},
            )
            continue
        if not record.is_active:
            continue
        records.append(record)
    return records


def parse_lesson_types(raw: Any) -> list[LessonType]:
    return [dto.to_entity() for dto in parse_records(raw, LessonTypeDTO)]


def parse_teori_lesson_types(raw: Any) -> list[TeoriLessonType]:
    return [dto.to_entity() for dto in parse_records(raw, TeoriLessonTypeDTO)]
