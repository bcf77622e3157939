from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    student = "student"
    teacher = "teacher"
    admin = "admin"


STAFF_ROLES = frozenset({Role.teacher, Role.admin})


@dataclass(frozen=True)
class ActingUser:
    id: str
    role: Role
    first_name: str = ""
    last_name: str = ""
    email: str = ""

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES


@dataclass(frozen=True)
class Student:
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    personal_number: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class GuestDetails:
    """Contact details typed in by an anonymous booker, or by staff creating a student."""

    first_name: str
    last_name: str
    email: str
    phone: str
    personal_number: str


@dataclass(frozen=True)
class Supervisor:
    name: str
    email: str = ""
    phone: str = ""
    personal_number: str = ""
