from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.dto.booking_payload import BookingPayload
from app.application.exceptions import BookingRejectedError
from app.application.ports.booking_gateway import BookingGatewayPort
from app.core.config import settings

DEFAULT_REJECTION = "Could not create the booking. Please try again."


class HttpBookingGateway(BookingGatewayPort):
    def __init__(
        self,
        base_url: str | None = None,
        api_token: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.BACKEND_BASE_URL or "").rstrip("/")
        self._api_token = api_token or settings.BACKEND_API_TOKEN
        self._client = client or httpx.Client(timeout=settings.HTTP_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("BACKEND_BASE_URL is required for the HTTP booking gateway")

    def create_booking(self, payload: BookingPayload) -> str:
        headers = {"Content-Type": "application/json"}
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"

        try:
            response = self._client.post(
                f"{self._base_url}/api/booking/create",
                json=payload.model_dump(mode="json", by_alias=True, exclude_none=True),
                headers=headers,
            )
        except httpx.HTTPError as e:
            self._logger.error("Booking request failed", extra={"reason": str(e)})
            raise BookingRejectedError(DEFAULT_REJECTION) from e

        data = _json_or_empty(response)
        if response.is_error:
            message = data.get("error") if isinstance(data.get("error"), str) else DEFAULT_REJECTION
            self._logger.warning(
                "Booking rejected by backend",
                extra={"reason": f"status={response.status_code} {message}"},
            )
            raise BookingRejectedError(message)

        booking = data.get("booking")
        booking_id = booking.get("id") if isinstance(booking, dict) else None
        if not booking_id:
            self._logger.error("Booking response missing id", extra={"reason": str(data)[:200]})
            raise BookingRejectedError(DEFAULT_REJECTION)
        return str(booking_id)


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
