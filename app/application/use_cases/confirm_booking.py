from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from app.application.dto.booking_payload import (
    BookingPayload,
    GuestPayload,
    LessonBookingPayload,
    SupervisorPayload,
    TeoriBookingPayload,
)
from app.application.exceptions import CapacityExceededError, FieldValidationError, TermsNotAcceptedError
from app.application.ports.booking_gateway import BookingGatewayPort
from app.application.use_cases.eligibility import EligibilityChecker, check_capacity
from app.application.use_cases.pricing import PricingCalculator
from app.domain.entities.booking_draft import LessonDraft, TeoriDraft
from app.domain.entities.catalog import TeoriSession
from app.domain.entities.wizard_session import WizardSession


@dataclass(frozen=True)
class Handoff:
    booking_id: str
    redirect_url: str


class ConfirmBookingUseCase:
    def __init__(
        self,
        gateway: BookingGatewayPort,
        pricing: PricingCalculator,
        eligibility: EligibilityChecker,
        payment_method: str = "swish",
        payment_hub_url: str = "/betalhubben",
    ) -> None:
        self._gateway = gateway
        self._pricing = pricing
        self._eligibility = eligibility
        self._payment_method = payment_method
        self._payment_hub_url = payment_hub_url
        self._logger = logging.getLogger(__name__)

    def execute(self, session: WizardSession) -> Handoff:
        """
        Submit the draft to the booking backend.

        Raises TermsNotAcceptedError before anything else, then CapacityExceededError,
        FieldValidationError, and BookingRejectedError from the gateway. The session
        is never modified here; on failure the caller keeps the draft as it was.
        """
        if not session.terms_accepted:
            raise TermsNotAcceptedError("Terms must be accepted before booking")

        draft = session.draft
        if draft.teori_session is not None:
            check_capacity(self._current_session(session), len(draft.supervisors))

        errors = self._eligibility.check_draft(draft, session.acting_user)
        if errors:
            raise FieldValidationError(errors)

        payload = self.build_payload(session)
        booking_id = self._gateway.create_booking(payload)
        self._logger.info(
            "Booking created",
            extra={
                "wizard_id": session.id,
                "booking_id": booking_id,
                "role": session.role.value if session.role else "anonymous",
            },
        )
        return Handoff(booking_id=booking_id, redirect_url=f"{self._payment_hub_url}?id={booking_id}")

    def _current_session(self, session: WizardSession) -> TeoriSession:
        """The chosen session as it looks in the latest catalog snapshot."""
        chosen = session.draft.teori_session
        lesson_type = session.find_teori_lesson_type(session.draft.teori_lesson_type.id)
        current = lesson_type.find_session(chosen.id) if lesson_type else None
        if current is None:
            raise CapacityExceededError(0, "This session is no longer available")
        return current

    def build_payload(self, session: WizardSession) -> BookingPayload:
        draft = session.draft
        price = self._pricing.calculate(draft, session.role)
        if price is None:
            raise FieldValidationError({"lesson_type": "Choose a lesson type"})

        selection = draft.selection
        if isinstance(selection, LessonDraft):
            start = datetime.combine(selection.selected_date, selection.selected_time)
            end = start + timedelta(minutes=selection.lesson_type.duration_minutes)
            booking = LessonBookingPayload(
                lesson_type_id=selection.lesson_type.id,
                scheduled_date=selection.selected_date,
                start_time=selection.selected_time,
                end_time=end.time(),
                duration_minutes=selection.lesson_type.duration_minutes,
                transmission_type=selection.transmission_type.value,
            )
        elif isinstance(selection, TeoriDraft):
            booking = TeoriBookingPayload(
                teori_lesson_type_id=selection.lesson_type.id,
                session_id=selection.session.id,
                supervisors=[
                    SupervisorPayload(
                        name=s.name.strip(),
                        email=s.email.strip(),
                        phone=s.phone.strip(),
                        personal_number=s.personal_number.strip(),
                    )
                    for s in draft.supervisors
                ],
            )
        else:
            raise FieldValidationError({"lesson_type": "Choose a lesson type"})

        user_id = None
        guest = None
        if draft.student is not None:
            user_id = draft.student.id
        elif session.acting_user is not None:
            user_id = session.acting_user.id
        elif draft.guest is not None:
            guest = GuestPayload(
                first_name=draft.guest.first_name.strip(),
                last_name=draft.guest.last_name.strip(),
                email=draft.guest.email.strip(),
                phone=draft.guest.phone.strip(),
                personal_number=draft.guest.personal_number.strip(),
            )

        return BookingPayload(
            booking=booking,
            user_id=user_id,
            guest=guest,
            payment_method=self._payment_method,
            total_price=price.total,
        )
