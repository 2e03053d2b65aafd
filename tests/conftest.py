from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

import mysql.connector
import pytest
from werkzeug.security import generate_password_hash

from src.classroom_attendance.classroom_attendance.analytics.model import ActivityRow
from src.classroom_attendance.classroom_attendance.attendance.model import NewSession, RecordInput
from src.classroom_attendance.classroom_attendance.core.enums import Role
from src.classroom_attendance.classroom_attendance.core.exceptions import NotFoundError
from src.classroom_attendance.classroom_attendance.students.model import EnrolledStudentRow, Student
from src.classroom_attendance.classroom_attendance.users.model import User


@pytest.fixture
def fixed_today() -> date:
    return date(2026, 3, 16)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 16, 9, 0, 0)


class InMemoryAttendanceDB:
    """Sessions, records and students with foreign-key and transaction semantics.

    Implements both the session repository and the analytics repository so the
    write path and the read path can be exercised against the same data.
    """

    def __init__(self, students: Optional[dict[str, str]] = None):
        self.students: dict[str, str] = dict(students or {})
        self.sessions: dict[int, dict] = {}
        self.records: list[dict] = []
        self._next_session_id = 1
        self._next_record_id = 1

    def create_session_with_records(self, *, session: NewSession, records) -> int:
        session_id = self._next_session_id
        staged_session = {
            "session_id": session_id,
            "teacher_id": session.teacher_id,
            "subject": session.subject,
            "section": session.section,
            "session_date": session.session_date,
            "session_type": session.session_type,
            "total_students": len(records),
        }
        staged_records = []
        for r in records:
            if r.student_id not in self.students:
                raise NotFoundError(f"Unknown student {r.student_id}")
            staged_records.append({"session_id": session_id, "record": r})

        # commit
        self._next_session_id += 1
        self.sessions[session_id] = staged_session
        for item in staged_records:
            item["record_id"] = self._next_record_id
            self._next_record_id += 1
            self.records.append(item)
        return session_id

    def records_for(self, session_id: int) -> list[RecordInput]:
        return [item["record"] for item in self.records if item["session_id"] == session_id]

    def add_session(self, *, session_date: date, section: str, records: list[RecordInput]) -> int:
        return self.create_session_with_records(
            session=NewSession(
                teacher_id=1,
                subject="Computer Science",
                section=section,
                session_date=session_date,
                session_type="offline",
                meta=None,
            ),
            records=records,
        )

    def get_activity_since(self, since: date):
        rows = []
        for s in sorted(self.sessions.values(), key=lambda s: (s["session_date"], s["session_id"])):
            if s["session_date"] < since:
                continue
            records = self.records_for(s["session_id"])
            if not records:
                rows.append(ActivityRow(session_id=s["session_id"], session_date=s["session_date"], section=s["section"]))
            for r in records:
                rows.append(
                    ActivityRow(
                        session_id=s["session_id"],
                        session_date=s["session_date"],
                        section=s["section"],
                        student_id=r.student_id,
                        full_name=self.students.get(r.student_id),
                        status=r.status,
                        confidence_score=r.confidence_score,
                    )
                )
        return rows


@dataclass
class InMemoryUsers:
    users_by_username: dict[str, User]
    logins: list[tuple[int, datetime]] = field(default_factory=list)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.users_by_username.get(username)

    def touch_last_login(self, user_id: int, *, at: datetime) -> bool:
        self.logins.append((user_id, at))
        return True


class InMemoryStudents:
    def __init__(self):
        self._students: dict[str, Student] = {}

    def exists(self, student_id: str) -> bool:
        return student_id in self._students

    def create(self, *, student_id, full_name, face_signature, section) -> Student:
        student = Student(
            student_id=student_id,
            full_name=full_name,
            section=section,
            enrollment_date=datetime(2026, 3, 1, 8, 0, 0),
            face_signature=face_signature,
        )
        self._students[student_id] = student
        return student

    def list_enrolled(self):
        return [
            EnrolledStudentRow(
                student_id=s.student_id,
                full_name=s.full_name,
                section=s.section,
                enrollment_date=s.enrollment_date,
                has_face_data=s.face_signature is not None,
            )
            for s in sorted(self._students.values(), key=lambda s: s.student_id)
        ]


@pytest.fixture
def teacher_user() -> User:
    return User(
        user_id=1,
        username="teacher",
        password_hash=generate_password_hash("teach123"),
        role=Role.TEACHER,
        first_name="Demo",
        last_name="Teacher",
    )


@pytest.fixture
def attendance_db() -> InMemoryAttendanceDB:
    return InMemoryAttendanceDB(
        {
            "STU001": "John Doe",
            "STU002": "Jane Smith",
            "STU003": "Mike Johnson",
            "STU004": "Sarah Wilson",
            "STU005": "David Brown",
        }
    )


class FakeCursor:
    """Scripted DB-API cursor: records statements, optionally fails on the Nth execute."""

    def __init__(self, conn: "FakeConnection"):
        self._conn = conn
        self.rowcount = 0
        self.lastrowid = None
        self.with_rows = False
        self.closed = False

    def execute(self, query, params=None):
        self._conn.executed.append((" ".join(query.split()), params))
        index = len(self._conn.executed)
        if self._conn.fail_on == index:
            raise self._conn.error
        if "INSERT INTO attendance_sessions" in query:
            self.lastrowid = self._conn.next_id
        self.with_rows = query.lstrip().upper().startswith("SELECT")
        self.rowcount = 1

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, *, rows=None, fail_on=None, error=None, rollback_error=None, close_error=None, next_id=42):
        self.rows = rows or []
        self.fail_on = fail_on
        self.error = error or mysql.connector.Error("boom")
        self.rollback_error = rollback_error
        self.close_error = close_error
        self.next_id = next_id
        self.executed: list[tuple[str, object]] = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = 0

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1
        if self.rollback_error is not None:
            raise self.rollback_error

    def close(self):
        self.closed += 1
        if self.close_error is not None:
            raise self.close_error


class FakeConnFactory:
    def __init__(self, conn: FakeConnection):
        self.conn = conn
        self.acquired = 0

    def connect(self):
        self.acquired += 1
        return self.conn
