from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: an enrolled student.

    ``face_signature`` is produced by the capture client and stored as-is.
    """

    student_id: str
    full_name: str
    section: str
    enrollment_date: Optional[datetime] = None
    face_signature: Optional[Any] = None


@dataclass(frozen=True)
class EnrolledStudentRow:
    """Read-model for the enrolled-students listing (no signature payload)."""

    student_id: str
    full_name: str
    section: str
    enrollment_date: Optional[datetime]
    has_face_data: bool
