from __future__ import annotations

import importlib
from types import SimpleNamespace

import pytest

from conftest import InMemoryStudents, InMemoryUsers
from src.classroom_attendance.classroom_attendance.analytics.service import AnalyticsService
from src.classroom_attendance.classroom_attendance.attendance.service import SessionRecorder
from src.classroom_attendance.classroom_attendance.container import Container
from src.classroom_attendance.classroom_attendance.core.exceptions import PersistenceError
from src.classroom_attendance.classroom_attendance.main import create_app
from src.classroom_attendance.classroom_attendance.students.service import StudentService
from src.classroom_attendance.classroom_attendance.users.service import AuthService, TokenService


class BrokenAnalyticsRepo:
    def get_activity_since(self, since):
        raise PersistenceError("SELECT failed: table attendance_sessions is locked")


@pytest.fixture
def settings():
    return importlib.import_module("config.testing")


@pytest.fixture
def container(attendance_db, teacher_user, settings):
    return Container(
        auth_service=AuthService(InMemoryUsers({"teacher": teacher_user})),
        token_service=TokenService(settings.JWT_SECRET),
        student_service=StudentService(InMemoryStudents()),
        session_recorder=SessionRecorder(attendance_db),
        analytics_service=AnalyticsService(attendance_db),
    )


@pytest.fixture
def client(settings, container):
    return create_app(settings=settings, container=container).test_client()


@pytest.fixture
def auth_headers(client):
    resp = client.post("/api/auth/login", json={"username": "teacher", "password": "teach123"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}


def _payload(records):
    return {
        "sessionData": {"startTime": "2026-03-16T08:00:00", "endTime": "2026-03-16T09:00:00", "duration": 60},
        "attendanceRecords": records,
        "subject": "Computer Science",
    }


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json()["status"] == "OK"


def test_login_returns_token_and_user(client):
    resp = client.post("/api/auth/login", json={"username": "teacher", "password": "teach123"})

    body = resp.get_json()
    assert body["user"] == {"id": 1, "username": "teacher", "role": "teacher", "firstName": "Demo", "lastName": "Teacher"}
    assert body["token"]


def test_login_with_bad_password_is_401(client):
    resp = client.post("/api/auth/login", json={"username": "teacher", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid credentials", "code": "AUTHENTICATION_ERROR"}


def test_protected_routes_require_token(client):
    assert client.post("/api/attendance/save", json=_payload([])).status_code == 401
    resp = client.get("/api/attendance/analytics", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "AUTHENTICATION_ERROR"


def test_save_attendance_creates_session_owned_by_caller(client, auth_headers, attendance_db):
    records = [
        {"studentId": "STU001", "status": "present", "detectionCount": 5, "confidenceScore": 0.85},
        {"studentId": "STU004", "status": "absent", "detectionCount": 0, "confidenceScore": 0},
    ]

    resp = client.post("/api/attendance/save", json=_payload(records), headers=auth_headers)

    assert resp.status_code == 200
    session_id = resp.get_json()["sessionId"]
    session = attendance_db.sessions[session_id]
    assert session["teacher_id"] == 1
    assert session["section"] == "S33"
    assert session["total_students"] == 2


def test_save_attendance_validation_error_is_400(client, auth_headers, attendance_db):
    payload = _payload([])
    del payload["subject"]

    resp = client.post("/api/attendance/save", json=payload, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "VALIDATION_ERROR"
    assert attendance_db.sessions == {}


def test_save_attendance_unknown_student_is_generic_500(client, auth_headers, attendance_db):
    resp = client.post(
        "/api/attendance/save",
        json=_payload([{"studentId": "STU999", "status": "present"}]),
        headers=auth_headers,
    )

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to save attendance", "code": "NOT_FOUND"}
    assert attendance_db.sessions == {}


def test_analytics_after_save(client, auth_headers):
    records = [{"studentId": "STU002", "status": "partial", "confidenceScore": 0.5}]
    client.post("/api/attendance/save", json=_payload(records), headers=auth_headers)

    body = client.get("/api/attendance/analytics", headers=auth_headers).get_json()

    assert body["trends"][0]["total_sessions"] == 1
    assert body["engagement"] == [{"section": "S33", "avg_engagement": 0.5, "present_count": 0, "total_count": 1}]
    assert body["riskStudents"][0]["student_id"] == "STU002"


def test_analytics_failure_does_not_leak_details(settings, container, auth_headers):
    broken = Container(
        auth_service=container.auth_service,
        token_service=container.token_service,
        student_service=container.student_service,
        session_recorder=container.session_recorder,
        analytics_service=AnalyticsService(BrokenAnalyticsRepo()),
    )
    client = create_app(settings=settings, container=broken).test_client()

    resp = client.get("/api/attendance/analytics", headers=auth_headers)

    assert resp.status_code == 500
    assert "locked" not in resp.get_data(as_text=True)


def test_enroll_and_list_students(client, auth_headers):
    body = {"studentId": "STU100", "fullName": "Grace Hopper", "faceEmbedding": [0.1, 0.2]}

    first = client.post("/api/students/enroll", json=body, headers=auth_headers)
    again = client.post("/api/students/enroll", json=body, headers=auth_headers)
    listed = client.get("/api/students/enrolled", headers=auth_headers).get_json()

    assert first.status_code == 200
    assert first.get_json()["student"]["student_id"] == "STU100"
    assert again.status_code == 400
    assert again.get_json()["error"] == "Student already enrolled"
    assert [s["student_id"] for s in listed] == ["STU100"]
    assert listed[0]["has_face_data"] is True


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nothing-here")

    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Route not found"


def _settings_with(settings, **overrides):
    values = {name: getattr(settings, name) for name in dir(settings) if name.isupper()}
    values.update(overrides)
    return SimpleNamespace(**values)


def test_configured_origin_receives_cors_headers(client):
    resp = client.post("/api/auth/login", json={"username": "teacher", "password": "teach123"}, headers={"Origin": "http://localhost:3000"})

    assert resp.headers.get("Access-Control-Allow-Origin") == "http://localhost:3000"


def test_empty_cors_origins_never_allows_cross_origin(settings, container):
    client = create_app(settings=_settings_with(settings, CORS_ORIGINS=[]), container=container).test_client()

    resp = client.get("/health", headers={"Origin": "https://evil.example"})

    assert resp.status_code == 200
    assert "Access-Control-Allow-Origin" not in resp.headers
