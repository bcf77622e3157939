from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.dto.catalog_payload import parse_lesson_types, parse_teori_lesson_types
from app.application.exceptions import CatalogUnavailableError
from app.application.ports.catalog import CatalogPort
from app.core.config import settings
from app.domain.entities.catalog import LessonType, TeoriLessonType


class HttpCatalog(CatalogPort):
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
            raise ValueError("BACKEND_BASE_URL is required for the HTTP catalog")

    def list_lesson_types(self) -> list[LessonType]:
        data = self._get("/api/lesson-types")
        return parse_lesson_types(data.get("lessonTypes", []))

    def list_teori_lesson_types(self) -> list[TeoriLessonType]:
        data = self._get("/api/teori/lesson-types")
        return parse_teori_lesson_types(data.get("lessonTypes", []))

    def _get(self, path: str) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {self._api_token}"} if self._api_token else {}
        try:
            response = self._client.get(f"{self._base_url}{path}", headers=headers)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Catalog request failed", extra={"reason": f"{path}: {e}"})
            raise CatalogUnavailableError(str(e)) from e

        if not isinstance(data, dict):
            raise CatalogUnavailableError(f"Unexpected catalog response from {path}")
        return data
