from __future__ import annotations

import logging
import uuid

from app.application.dto.booking_payload import BookingPayload
from app.application.exceptions import BookingRejectedError
from app.application.ports.booking_gateway import BookingGatewayPort


class MockBookingGateway(BookingGatewayPort):
    """Records submitted payloads. Set reject_with to simulate a backend refusal."""

    def __init__(self, reject_with: str | None = None) -> None:
        self.reject_with = reject_with
        self.payloads: list[BookingPayload] = []
        self._logger = logging.getLogger(__name__)

    def create_booking(self, payload: BookingPayload) -> str:
        self.payloads.append(payload)
        if self.reject_with:
            raise BookingRejectedError(self.reject_with)
        booking_id = f"mock-{uuid.uuid4().hex[:12]}"
        self._logger.info("Mock booking created", extra={"booking_id": booking_id})
        return booking_id
