from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of an authenticated user."""

    TEACHER = "teacher"
    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    """Outcome of one student within one session, as stored in the DB."""

    PRESENT = "present"
    PARTIAL = "partial"
    ABSENT = "absent"

    @property
    def counts_as_present(self) -> bool:
        return {
            AttendanceStatus.PRESENT: True,
            AttendanceStatus.PARTIAL: False,
            AttendanceStatus.ABSENT: False,
        }[self]

    @property
    def has_detections(self) -> bool:
        return {
            AttendanceStatus.PRESENT: True,
            AttendanceStatus.PARTIAL: True,
            AttendanceStatus.ABSENT: False,
        }[self]
