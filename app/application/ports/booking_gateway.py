from __future__ import annotations

from abc import ABC, abstractmethod

from app.application.dto.booking_payload import BookingPayload


class BookingGatewayPort(ABC):
    @abstractmethod
    def create_booking(self, payload: BookingPayload) -> str:
        """Create booking. Returns booking id, raises BookingRejectedError with a user-facing message."""
        raise NotImplementedError
