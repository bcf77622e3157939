from __future__ import annotations

from datetime import date, time, timedelta
from decimal import Decimal

from app.domain.entities.catalog import LessonType, TeoriLessonType, TeoriSession
from app.domain.entities.participants import Student

_NEXT_WEEK = date.today() + timedelta(days=7)

LESSON_TYPES: list[LessonType] = [
    LessonType(
        id="korlektion-40",
        name="Körlektion 40 min",
        description="Standard driving lesson",
        duration_minutes=40,
        price=Decimal("550"),
        price_student=Decimal("495"),
    ),
    LessonType(
        id="korlektion-80",
        name="Dubbellektion 80 min",
        description="Double lesson",
        duration_minutes=80,
        price=Decimal("1050"),
    ),
    LessonType(
        id="riskettan",
        name="Riskettan",
        description="Mandatory risk education part 1",
        duration_minutes=180,
        price=Decimal("800"),
    ),
]

TEORI_LESSON_TYPES: list[TeoriLessonType] = [
    TeoriLessonType(
        id="handledarkurs",
        name="Handledarkurs",
        description="Introductory course for supervisor and learner",
        allows_supervisors=True,
        price=Decimal("500"),
        price_per_supervisor=Decimal("500"),
        duration_minutes=180,
        max_participants=20,
        sessions=(
            TeoriSession(
                id="handledarkurs-1",
                title="Handledarkurs kväll",
                date=_NEXT_WEEK,
                start_time=time(17, 30),
                end_time=time(20, 30),
                max_participants=20,
                current_participants=6,
                price=Decimal("500"),
                price_per_supervisor=Decimal("500"),
            ),
            TeoriSession(
                id="handledarkurs-2",
                title="Handledarkurs helg",
                date=_NEXT_WEEK + timedelta(days=3),
                start_time=time(10, 0),
                end_time=time(13, 0),
                max_participants=20,
                current_participants=20,
                price=Decimal("500"),
                price_per_supervisor=Decimal("500"),
            ),
        ),
    ),
    TeoriLessonType(
        id="teorilektion",
        name="Teorilektion",
        description="Group theory lesson",
        allows_supervisors=False,
        price=Decimal("300"),
        duration_minutes=90,
        max_participants=12,
        sessions=(
            TeoriSession(
                id="teorilektion-1",
                title="Trafikregler",
                date=_NEXT_WEEK + timedelta(days=1),
                start_time=time(18, 0),
                end_time=time(19, 30),
                max_participants=12,
                current_participants=4,
                price=Decimal("300"),
            ),
        ),
    ),
]

STUDENTS: list[Student] = [
    Student(
        id="student-1",
        first_name="Elsa",
        last_name="Lindqvist",
        email="elsa.lindqvist@example.se",
        phone="0701234567",
        personal_number="20050312-1234",
    ),
    Student(
        id="student-2",
        first_name="Omar",
        last_name="Hassan",
        email="omar.hassan@example.se",
        phone="0737654321",
        personal_number="20040521-5678",
    ),
]
