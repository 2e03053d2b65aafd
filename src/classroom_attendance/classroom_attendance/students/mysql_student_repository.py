from __future__ import annotations

import json
from typing import Any, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ValidationError
from ..database.mysql_base import Store, fetchall, fetchone
from .model import EnrolledStudentRow, Student
from .repository import StudentRepository


class MySQLStudentRepository(StudentRepository):
    def __init__(self, store: Store):
        self._store = store

    def exists(self, student_id: str) -> bool:
        rows = self._store.execute("SELECT student_id FROM students WHERE student_id=%s", (student_id,))
        return bool(rows)

    def create(self, *, student_id: str, full_name: str, face_signature: Any, section: str) -> Student:
        with self._store.transaction() as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO students(student_id, full_name, face_embedding, section, enrollment_date)
                    VALUES(%s,%s,%s,%s,NOW())
                    """,
                    (student_id, full_name, json.dumps(face_signature), section),
                )
            except mysql.connector.IntegrityError as exc:
                if exc.errno == errorcode.ER_DUP_ENTRY:
                    raise ValidationError("Student already enrolled") from exc
                raise
            cur.execute(
                "SELECT student_id, full_name, section, enrollment_date FROM students WHERE student_id=%s",
                (student_id,),
            )
            row = fetchone(cur)
            return Student(
                student_id=row["student_id"],
                full_name=row["full_name"],
                section=row["section"],
                enrollment_date=row.get("enrollment_date"),
                face_signature=face_signature,
            )

    def list_enrolled(self) -> Sequence[EnrolledStudentRow]:
        with self._store.transaction() as (_, cur):
            cur.execute(
                """
                SELECT
                    student_id,
                    full_name,
                    enrollment_date,
                    face_embedding IS NOT NULL AS has_face_data,
                    section
                FROM students
                ORDER BY enrollment_date DESC
                """
            )
            return [
                EnrolledStudentRow(
                    student_id=r["student_id"],
                    full_name=r["full_name"],
                    section=r["section"],
                    enrollment_date=r.get("enrollment_date"),
                    has_face_data=bool(r["has_face_data"]),
                )
                for r in fetchall(cur)
            ]
