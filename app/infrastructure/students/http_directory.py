from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.exceptions import BookingRejectedError
from app.application.ports.student_directory import StudentDirectoryPort
from app.core.config import settings
from app.domain.entities.participants import GuestDetails, Student


class HttpStudentDirectory(StudentDirectoryPort):
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
            raise ValueError("BACKEND_BASE_URL is required for the HTTP student directory")

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_token}"} if self._api_token else {}

    def search_students(self, query: str) -> list[Student]:
        params = {"search": query} if query else {}
        response = self._client.get(
            f"{self._base_url}/api/admin/students",
            params=params,
            headers=self._headers(),
        )
        response.raise_for_status()
        data = response.json()
        students = data.get("students", []) if isinstance(data, dict) else data
        return [s for s in (_to_student(item) for item in students or []) if s is not None]

    def get_student(self, student_id: str) -> Student | None:
        response = self._client.get(
            f"{self._base_url}/api/admin/students/{student_id}",
            headers=self._headers(),
        )
        if response.status_code == 404:
            return None
        response.raise_for_status()
        data = response.json()
        return _to_student(data.get("student", data) if isinstance(data, dict) else None)

    def create_student(self, details: GuestDetails) -> Student:
        response = self._client.post(
            f"{self._base_url}/api/admin/students",
            json={
                "firstName": details.first_name,
                "lastName": details.last_name,
                "email": details.email,
                "phone": details.phone,
                "personalNumber": details.personal_number,
            },
            headers=self._headers(),
        )
        try:
            data = response.json()
        except ValueError:
            data = {}
        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            self._logger.warning(
                "Student creation rejected",
                extra={"reason": f"status={response.status_code} {message}"},
            )
            raise BookingRejectedError(message or "Could not create the student")

        student = _to_student(data.get("student", data) if isinstance(data, dict) else None)
        if student is None:
            raise BookingRejectedError("Could not create the student")
        return student


def _to_student(item: Any) -> Student | None:
    if not isinstance(item, dict) or item.get("id") is None:
        return None
    return Student(
        id=str(item["id"]),
        first_name=item.get("firstName") or "",
        last_name=item.get("lastName") or "",
        email=item.get("email") or "",
        phone=item.get("phone"),
        personal_number=item.get("personalNumber"),
    )
