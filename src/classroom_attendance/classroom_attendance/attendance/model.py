from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class SessionMeta:
    """Timing of one classroom occurrence as reported by the capture client."""

    start_time: Optional[datetime]
    end_time: Optional[datetime]
    duration_minutes: Optional[int]


@dataclass(frozen=True)
class NewSession:
    """Validated session header, written together with its records."""

    teacher_id: int
    subject: str
    section: str
    session_date: date
    session_type: str
    meta: SessionMeta


@dataclass(frozen=True)
class RecordInput:
    """One student's validated outcome, not yet bound to a session id."""

    student_id: str
    status: AttendanceStatus
    detection_count: int = 0
    confidence_score: float = 0.0
    first_detection_time: Optional[datetime] = None
    last_detection_time: Optional[datetime] = None
