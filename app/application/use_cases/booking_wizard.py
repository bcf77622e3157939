from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field, replace
from datetime import date as date_type
from datetime import time as time_type
from typing import Callable

from app.application.exceptions import (
    BookingRejectedError,
    CapacityExceededError,
    DraftNotFoundError,
    FieldValidationError,
    InvalidTransitionError,
    TermsNotAcceptedError,
)
from app.application.ports.draft_store import DraftStorePort
from app.application.use_cases.catalog_loader import CatalogLoaderUseCase
from app.application.use_cases.confirm_booking import ConfirmBookingUseCase
from app.application.use_cases.draft_reducer import draft_reducer
from app.application.use_cases.eligibility import (
    EligibilityChecker,
    check_capacity,
    ensure_can_add_supervisor,
    validate_registration,
)
from app.application.use_cases.pricing import PriceBreakdown, PricingCalculator
from app.application.use_cases.step_router import accepts, next_step
from app.application.use_cases.student_lookup import StudentLookupUseCase
from app.domain.entities.booking_draft import TransmissionType
from app.domain.entities.participants import ActingUser, GuestDetails, Supervisor
from app.domain.entities.wizard_event import (
    GearChosen,
    GuestRegistered,
    LessonTypeChosen,
    NavigatedBack,
    SlotChosen,
    StudentChosen,
    SupervisorsSubmitted,
    TeoriLessonTypeChosen,
    TeoriSessionChosen,
    WizardEvent,
)
from app.domain.entities.wizard_session import WizardSession
from app.domain.entities.wizard_step import WizardStep


@dataclass(frozen=True)
class WizardResult:
    status: str  # "ok", "invalid", "capacity_exceeded", "disabled", "rejected", "confirmed"
    session: WizardSession
    errors: dict[str, str] = field(default_factory=dict)
    notice: str | None = None
    price: PriceBreakdown | None = None
    redirect_url: str | None = None

    @property
    def ok(self) -> bool:
        return self.status in ("ok", "confirmed")


class BookingWizardUseCase:
    def __init__(
        self,
        store: DraftStorePort,
        catalog_loader: CatalogLoaderUseCase,
        student_lookup: StudentLookupUseCase,
        pricing: PricingCalculator,
        eligibility: EligibilityChecker,
        confirm_booking: ConfirmBookingUseCase,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._catalog_loader = catalog_loader
        self._student_lookup = student_lookup
        self._pricing = pricing
        self._eligibility = eligibility
        self._confirm_booking = confirm_booking
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def start(self, acting_user: ActingUser | None) -> WizardResult:
        # Abandoned drafts are discarded here
        self._store.purge_expired()
        now = self._clock()
        session = WizardSession(id=uuid.uuid4().hex, acting_user=acting_user, created_at=now, updated_at=now)
        self._store.put(session)
        self._logger.info(
            "Booking wizard started",
            extra={"wizard_id": session.id, "role": session.role.value if session.role else "anonymous"},
        )
        return WizardResult(status="ok", session=session)

    def get(self, session_id: str) -> WizardSession:
        session = self._store.get(session_id)
        if session is None:
            raise DraftNotFoundError(session_id)
        return session

    def view(self, session_id: str) -> WizardResult:
        session = self.get(session_id)
        return WizardResult(status="ok", session=session, price=self.price(session))

    def price(self, session: WizardSession) -> PriceBreakdown | None:
        return self._pricing.calculate(session.draft, session.role)

    def load_catalog(self, session_id: str) -> WizardResult:
        """Reload both catalogs into the session. When loads overlap, the last one stored wins."""
        session = self.get(session_id)
        lessons = self._catalog_loader.load_lesson_types()
        teori = self._catalog_loader.load_teori_lesson_types()
        notices = [result.notice for result in (lessons, teori) if result.failed]

        session = replace(
            session,
            lesson_types=lessons.items,
            teori_lesson_types=teori.items,
            updated_at=self._clock(),
        )
        self._store.put(session)
        return WizardResult(
            status="ok",
            session=session,
            notice="; ".join(notices) or None,
            price=self.price(session),
        )

    def choose_lesson_type(self, session_id: str, lesson_type_id: str) -> WizardResult:
        session = self.get(session_id)

        def build() -> WizardEvent:
            lesson_type = session.find_lesson_type(lesson_type_id)
            if lesson_type is None:
                raise FieldValidationError({"lesson_type_id": "Unknown lesson type"})
            return LessonTypeChosen(lesson_type)

        return self._advance(session, build)

    def choose_teori_lesson_type(self, session_id: str, lesson_type_id: str) -> WizardResult:
        session = self.get(session_id)

        def build() -> WizardEvent:
            lesson_type = session.find_teori_lesson_type(lesson_type_id)
            if lesson_type is None:
                raise FieldValidationError({"teori_lesson_type_id": "Unknown theory lesson type"})
            return TeoriLessonTypeChosen(lesson_type)

        return self._advance(session, build)

    def choose_slot(self, session_id: str, selected_date: date_type, selected_time: time_type) -> WizardResult:
        session = self.get(session_id)
        return self._advance(session, lambda: SlotChosen(selected_date, selected_time))

    def choose_teori_session(self, session_id: str, teori_session_id: str) -> WizardResult:
        session = self.get(session_id)

        def build() -> WizardEvent:
            lesson_type = session.draft.teori_lesson_type
            chosen = lesson_type.find_session(teori_session_id) if lesson_type else None
            if chosen is None:
                raise FieldValidationError({"session_id": "Unknown session"})
            check_capacity(chosen, 0)
            return TeoriSessionChosen(chosen)

        return self._advance(session, build)

    def choose_gear(self, session_id: str, transmission_type: str) -> WizardResult:
        session = self.get(session_id)

        def build() -> WizardEvent:
            try:
                return GearChosen(TransmissionType(transmission_type))
            except ValueError:
                raise FieldValidationError({"transmission_type": "Choose manual or automatic"}) from None

        return self._advance(session, build)

    def choose_student(self, session_id: str, student_id: str) -> WizardResult:
        session = self.get(session_id)

        def build() -> WizardEvent:
            student = self._student_lookup.get(student_id)
            if student is None:
                raise FieldValidationError({"student_id": "Unknown student"})
            return StudentChosen(student)

        return self._advance(session, build)

    def register_guest(self, session_id: str, guest: GuestDetails) -> WizardResult:
        session = self.get(session_id)

        def build() -> WizardEvent:
            errors = validate_registration(guest)
            if errors:
                raise FieldValidationError(errors)
            return GuestRegistered(guest)

        return self._advance(session, build)

    def submit_supervisors(self, session_id: str, supervisors: list[Supervisor]) -> WizardResult:
        session = self.get(session_id)

        def build() -> WizardEvent:
            submitted = tuple(supervisors)
            errors = self._eligibility.validate_supervisors(session.draft, submitted)
            if errors:
                raise FieldValidationError(errors)
            if session.draft.teori_session is not None:
                for count in range(len(submitted)):
                    ensure_can_add_supervisor(session.draft.teori_session, count)
            return SupervisorsSubmitted(submitted)

        return self._advance(session, build)

    def go_back(self, session_id: str) -> WizardResult:
        session = self.get(session_id)
        return self._advance(session, lambda: NavigatedBack(session.step))

    def accept_terms(self, session_id: str, accepted: bool) -> WizardResult:
        session = self.get(session_id)
        if session.step is not WizardStep.confirmation:
            return WizardResult(
                status="invalid",
                session=session,
                errors={"step": "Terms are accepted on the confirmation step"},
                price=self.price(session),
            )
        session = replace(session, terms_accepted=bool(accepted), updated_at=self._clock())
        self._store.put(session)
        return WizardResult(status="ok", session=session, price=self.price(session))

    def confirm(self, session_id: str) -> WizardResult:
        session = self.get(session_id)
        price = self.price(session)

        if session.step is not WizardStep.confirmation:
            return WizardResult(
                status="invalid",
                session=session,
                errors={"step": f"Cannot confirm from step {session.step.value}"},
                price=price,
            )

        try:
            handoff = self._confirm_booking.execute(session)
        except TermsNotAcceptedError as e:
            return WizardResult(status="disabled", session=session, errors={"terms": str(e)}, price=price)
        except CapacityExceededError as e:
            return WizardResult(status="capacity_exceeded", session=session, errors={"capacity": str(e)}, price=price)
        except FieldValidationError as e:
            return WizardResult(status="invalid", session=session, errors=e.errors, price=price)
        except BookingRejectedError as e:
            self._logger.warning("Booking rejected", extra={"wizard_id": session.id, "reason": str(e)})
            return WizardResult(status="rejected", session=session, errors={"booking": str(e)}, price=price)

        # The draft is now a persisted booking; it no longer belongs to the wizard.
        self._store.delete(session.id)
        session = replace(session, booking_id=handoff.booking_id, updated_at=self._clock())
        return WizardResult(status="confirmed", session=session, price=price, redirect_url=handoff.redirect_url)

    def _advance(self, session: WizardSession, build_event: Callable[[], WizardEvent]) -> WizardResult:
        """Validate, reduce, route. Any failure returns the session exactly as it was."""
        role = session.role
        try:
            event = build_event()
            if not accepts(session.step, event):
                raise InvalidTransitionError(
                    f"{type(event).__name__} is not possible at step {session.step.value}"
                )
            draft = draft_reducer(session.draft, event)
            step = next_step(session.step, draft, role, event)
        except FieldValidationError as e:
            return WizardResult(status="invalid", session=session, errors=e.errors, price=self.price(session))
        except CapacityExceededError as e:
            return WizardResult(
                status="capacity_exceeded",
                session=session,
                errors={"capacity": str(e)},
                price=self.price(session),
            )
        except InvalidTransitionError as e:
            return WizardResult(status="invalid", session=session, errors={"step": str(e)}, price=self.price(session))

        price = self._pricing.calculate(draft, role)
        draft = replace(draft, total_price=price.total if price else None)
        updated = replace(session, draft=draft, step=step, terms_accepted=False, updated_at=self._clock())
        self._store.put(updated)
        self._logger.info(
            "Wizard step changed",
            extra={"wizard_id": session.id, "step": f"{session.step.value}->{step.value}"},
        )
        return WizardResult(status="ok", session=updated, price=price)
