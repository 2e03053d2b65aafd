from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_SECTION
from ..core.exceptions import ValidationError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use case: enroll students and list who is enrolled."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def enroll(
        self,
        *,
        student_id: Any,
        full_name: Any,
        face_signature: Any,
        section: Optional[str] = None,
    ) -> Student:
        if not student_id or not full_name or not face_signature:
            raise ValidationError("Student ID, name, and face embedding required")

        student_id = require_non_empty(str(student_id), "Student ID")
        full_name = require_non_empty(str(full_name), "Full name")
        section = (str(section).strip() if section else "") or DEFAULT_SECTION

        if self._students.exists(student_id):
            logger.warning("Enrollment rejected - student already enrolled: %s", student_id)
            raise ValidationError("Student already enrolled")

        student = self._students.create(
            student_id=student_id,
            full_name=full_name,
            face_signature=face_signature,
            section=section,
        )
        logger.info("Student enrolled - id: %s, section: %s", student.student_id, student.section)
        return student

    def list_enrolled(self) -> list[dict]:
        return [
            {
                "student_id": r.student_id,
                "full_name": r.full_name,
                "enrollment_date": r.enrollment_date.isoformat() if r.enrollment_date else None,
                "has_face_data": r.has_face_data,
                "section": r.section,
            }
            for r in self._students.list_enrolled()
        ]
