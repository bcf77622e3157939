"""
Tests for the HTTP API.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.application.use_cases.student_lookup import StudentLookupUseCase
from app.core.config import settings
from app.infrastructure.students.memory_directory import MemoryStudentDirectory
from app.main import app
from app.wiring.dependencies import get_booking_wizard_use_case, get_student_lookup_use_case

WIZARD = "/api/v1/wizard"


@pytest.fixture
def client(wizard, students):
    lookup = StudentLookupUseCase(directory=MemoryStudentDirectory(students))
    app.dependency_overrides[get_booking_wizard_use_case] = lambda: wizard
    app.dependency_overrides[get_student_lookup_use_case] = lambda: lookup
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "env": settings.ENV}


def test_guest_books_a_lesson_over_http(client, gateway):
    response = client.post(WIZARD, json={})
    assert response.status_code == 201
    data = response.json()
    wizard_id = data["wizard_id"]
    assert data["step"] == "lesson_selection"
    assert [lt["id"] for lt in data["lesson_types"]] == ["korlektion"]

    response = client.post(f"{WIZARD}/{wizard_id}/lesson-type", json={"lesson_type_id": "korlektion"})
    assert response.status_code == 200
    assert response.json()["step"] == "driving_calendar"

    response = client.post(f"{WIZARD}/{wizard_id}/slot", json={"selected_date": "2030-05-10", "selected_time": "09:00"})
    assert response.json()["step"] == "gear_selection"

    response = client.post(f"{WIZARD}/{wizard_id}/gear", json={"transmission_type": "automatic"})
    data = response.json()
    assert data["step"] == "guest_registration"
    assert Decimal(data["price"]["total"]) == Decimal("500")

    response = client.post(
        f"{WIZARD}/{wizard_id}/guest",
        json={
            "first_name": "Lisa",
            "last_name": "Ek",
            "email": "lisa.ek@example.se",
            "phone": "0709998877",
            "personal_number": "20050505-4321",
        },
    )
    assert response.json()["step"] == "confirmation"

    assert client.post(f"{WIZARD}/{wizard_id}/confirm").status_code == 400

    assert client.post(f"{WIZARD}/{wizard_id}/terms", json={"accepted": True}).json()["terms_accepted"] is True
    response = client.post(f"{WIZARD}/{wizard_id}/confirm")
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "confirmed"
    assert data["redirect_url"] == f"/betalhubben?id={data['booking_id']}"
    assert gateway.payloads[0].guest.first_name == "Lisa"

    assert client.get(f"{WIZARD}/{wizard_id}").status_code == 404


def test_teori_sessions_listed_and_capacity_conflict(client):
    wizard_id = client.post(WIZARD, json={"acting_user": {"id": "u1", "role": "student"}}).json()["wizard_id"]

    data = client.post(
        f"{WIZARD}/{wizard_id}/teori-lesson-type", json={"lesson_type_id": "handledarkurs"}
    ).json()
    assert data["step"] == "teori_sessions"
    assert data["mode"] == "teori"
    assert [s["id"] for s in data["bookable_sessions"]] == ["hk-open", "hk-tight"]

    response = client.post(f"{WIZARD}/{wizard_id}/teori-session", json={"session_id": "hk-full"})
    assert response.status_code == 409
    assert response.json()["errors"]["capacity"] == "No spots available on this session"


def test_validation_errors_are_422(client):
    wizard_id = client.post(WIZARD, json={}).json()["wizard_id"]
    response = client.post(f"{WIZARD}/{wizard_id}/lesson-type", json={"lesson_type_id": "nope"})

    assert response.status_code == 422
    assert response.json()["errors"] == {"lesson_type_id": "Unknown lesson type"}
    assert response.json()["step"] == "lesson_selection"


def test_back_navigation(client):
    wizard_id = client.post(WIZARD, json={}).json()["wizard_id"]
    client.post(f"{WIZARD}/{wizard_id}/lesson-type", json={"lesson_type_id": "korlektion"})

    data = client.post(f"{WIZARD}/{wizard_id}/back").json()
    assert data["step"] == "lesson_selection"
    assert data["draft"]["selection"] is None


def test_unknown_wizard_is_404(client):
    assert client.get(f"{WIZARD}/does-not-exist").status_code == 404
    assert client.post(f"{WIZARD}/does-not-exist/back").status_code == 404


def test_student_search_and_create(client):
    found = client.get("/api/v1/students", params={"q": "elsa"}).json()["students"]
    assert [s["id"] for s in found] == ["student-1"]

    response = client.post(
        "/api/v1/students",
        json={
            "first_name": " Nils ",
            "last_name": "Holm",
            "email": "Nils.Holm@Example.se",
            "phone": "0701234567",
            "personal_number": "200101011234",
        },
    )
    assert response.status_code == 201
    student = response.json()["student"]
    assert student["first_name"] == "Nils"
    assert student["email"] == "nils.holm@example.se"
    assert student["personal_number"] == "20010101-1234"

    response = client.post("/api/v1/students", json={"first_name": "Nils"})
    assert response.status_code == 422
    assert "email" in response.json()["detail"]
