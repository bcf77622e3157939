"""
Shared fixtures for the booking wizard tests.
"""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

import pytest

from app.application.use_cases.booking_wizard import BookingWizardUseCase
from app.application.use_cases.catalog_loader import CatalogLoaderUseCase
from app.application.use_cases.confirm_booking import ConfirmBookingUseCase
from app.application.use_cases.eligibility import EligibilityChecker
from app.application.use_cases.pricing import PricingCalculator, SupervisorPricingRule
from app.application.use_cases.student_lookup import StudentLookupUseCase
from app.domain.entities.catalog import LessonType, TeoriLessonType, TeoriSession
from app.domain.entities.participants import ActingUser, GuestDetails, Role, Student, Supervisor
from app.infrastructure.booking.mock_booking_gateway import MockBookingGateway
from app.infrastructure.catalog.static_catalog import StaticCatalog
from app.infrastructure.store.memory_store import MemoryDraftStore
from app.infrastructure.students.memory_directory import MemoryStudentDirectory


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _session(session_id: str, max_participants: int, current: int, day: int = 10) -> TeoriSession:
    return TeoriSession(
        id=session_id,
        title=f"Handledarkurs {session_id}",
        date=date(2030, 5, day),
        start_time=time(17, 30),
        end_time=time(20, 30),
        max_participants=max_participants,
        current_participants=current,
        price=Decimal("300"),
        price_per_supervisor=Decimal("100"),
    )


@pytest.fixture
def lesson_type() -> LessonType:
    return LessonType(
        id="korlektion",
        name="Körlektion",
        duration_minutes=40,
        price=Decimal("500"),
        price_student=Decimal("400"),
    )


@pytest.fixture
def open_session() -> TeoriSession:
    return _session("hk-open", max_participants=20, current=5)


@pytest.fixture
def tight_session() -> TeoriSession:
    """Two spots left: the participant and one supervisor."""
    return _session("hk-tight", max_participants=3, current=1, day=12)


@pytest.fixture
def full_session() -> TeoriSession:
    return _session("hk-full", max_participants=10, current=10, day=14)


@pytest.fixture
def handledarkurs(open_session, tight_session, full_session) -> TeoriLessonType:
    return TeoriLessonType(
        id="handledarkurs",
        name="Handledarkurs",
        allows_supervisors=True,
        price=Decimal("300"),
        price_per_supervisor=Decimal("100"),
        duration_minutes=180,
        max_participants=20,
        sessions=(open_session, tight_session, full_session),
    )


@pytest.fixture
def teorilektion() -> TeoriLessonType:
    return TeoriLessonType(
        id="teorilektion",
        name="Teorilektion",
        allows_supervisors=False,
        price=Decimal("250"),
        duration_minutes=90,
        max_participants=12,
        sessions=(
            TeoriSession(
                id="tl-1",
                title="Trafikregler",
                date=date(2030, 5, 11),
                start_time=time(18, 0),
                end_time=time(19, 30),
                max_participants=12,
                current_participants=2,
                price=Decimal("250"),
            ),
        ),
    )


@pytest.fixture
def supervisors() -> list[Supervisor]:
    return [
        Supervisor(name="Anna Berg", email="anna.berg@example.se", phone="0701112233", personal_number="19800101-1234"),
        Supervisor(name="Per Berg", phone="+46702223344", personal_number="7903025678"),
    ]


@pytest.fixture
def guest() -> GuestDetails:
    return GuestDetails(
        first_name="Lisa",
        last_name="Ek",
        email="lisa.ek@example.se",
        phone="070-999 88 77",
        personal_number="20050505-4321",
    )


@pytest.fixture
def students() -> list[Student]:
    return [
        Student(id="student-1", first_name="Elsa", last_name="Lindqvist", email="elsa@example.se",
                personal_number="20050312-1234"),
        Student(id="student-2", first_name="Omar", last_name="Hassan", email="omar@example.se"),
    ]


@pytest.fixture
def student_user() -> ActingUser:
    return ActingUser(id="user-student", role=Role.student, first_name="Sara")


@pytest.fixture
def teacher_user() -> ActingUser:
    return ActingUser(id="user-teacher", role=Role.teacher, first_name="Karin")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def gateway() -> MockBookingGateway:
    return MockBookingGateway()


@pytest.fixture
def make_wizard(lesson_type, handledarkurs, teorilektion, students, clock, gateway):
    """Factory so tests can swap the catalog or the supervisor pricing rule."""

    def _make(
        catalog=None,
        rule: SupervisorPricingRule = SupervisorPricingRule.per_supervisor,
        store=None,
    ) -> BookingWizardUseCase:
        pricing = PricingCalculator(rule=rule)
        eligibility = EligibilityChecker(max_supervisors=5)
        return BookingWizardUseCase(
            store=store or MemoryDraftStore(ttl_minutes=30, clock=clock),
            catalog_loader=CatalogLoaderUseCase(
                catalog=catalog or StaticCatalog([lesson_type], [handledarkurs, teorilektion])
            ),
            student_lookup=StudentLookupUseCase(directory=MemoryStudentDirectory(students)),
            pricing=pricing,
            eligibility=eligibility,
            confirm_booking=ConfirmBookingUseCase(gateway=gateway, pricing=pricing, eligibility=eligibility),
            clock=clock,
        )

    return _make


@pytest.fixture
def wizard(make_wizard) -> BookingWizardUseCase:
    return make_wizard()
