from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_datetime, today_local
from ..common.validators import (
    optional_non_negative_int,
    require_non_empty,
    require_present,
    require_unit_interval,
)
from ..core.constants import CONFIDENCE_DECIMALS, DEFAULT_SECTION, DEFAULT_SESSION_TYPE
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import NewSession, RecordInput, SessionMeta
from .repository import SessionRepository

logger = logging.getLogger(__name__)


def _label(value: Any, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValidationError("Section and session type must be strings")
    return value.strip() or default


def parse_status(value: Any, field_name: str = "status") -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from None


def parse_session_meta(raw: Any) -> SessionMeta:
    require_present(raw, "Session data")
    if not isinstance(raw, Mapping):
        raise ValidationError("Session data must be an object")

    duration = raw.get("duration", raw.get("durationMinutes"))
    return SessionMeta(
        start_time=parse_iso_datetime(raw.get("startTime"), "sessionData.startTime"),
        end_time=parse_iso_datetime(raw.get("endTime"), "sessionData.endTime"),
        duration_minutes=optional_non_negative_int(duration, "sessionData.duration"),
    )


def parse_record(raw: Any, index: int) -> RecordInput:
    prefix = f"attendanceRecords[{index}]"
    if not isinstance(raw, Mapping):
        raise ValidationError(f"{prefix} must be an object")

    student_id = raw.get("studentId")
    if isinstance(student_id, int) and not isinstance(student_id, bool):
        student_id = str(student_id)
    student_id = require_non_empty(student_id, f"{prefix}.studentId")

    status = parse_status(raw.get("status"), f"{prefix}.status")
    first_seen = parse_iso_datetime(raw.get("firstDetectionTime"), f"{prefix}.firstDetectionTime")
    last_seen = parse_iso_datetime(raw.get("lastDetectionTime"), f"{prefix}.lastDetectionTime")
    if not status.has_detections:
        first_seen = last_seen = None

    return RecordInput(
        student_id=student_id,
        status=status,
        detection_count=optional_non_negative_int(raw.get("detectionCount"), f"{prefix}.detectionCount", default=0),
        confidence_score=require_unit_interval(
            raw.get("confidenceScore"), f"{prefix}.confidenceScore", decimals=CONFIDENCE_DECIMALS
        ),
        first_detection_time=first_seen,
        last_detection_time=last_seen,
    )


class SessionRecorder:
    """Use case: record one attendance session together with its records.

    Validation happens before any database work; persistence is a single
    transaction owned by the repository. Calls are not idempotent: submitting
    the same payload twice creates two sessions.
    """

    def __init__(self, sessions: SessionRepository):
        self._sessions = sessions

    def record_session(
        self,
        *,
        owner_id: int,
        subject: Any,
        section: Optional[str],
        session_meta: Any,
        session_type: Optional[str],
        records: Optional[Sequence[Any]],
        today: Optional[date] = None,
    ) -> int:
        if not subject or session_meta is None or records is None:
            raise ValidationError("Session data, attendance records, and subject required")

        subject = require_non_empty(subject, "Subject")
        if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Sequence):
            raise ValidationError("Attendance records must be a list")

        meta = parse_session_meta(session_meta)
        parsed = [parse_record(raw, i) for i, raw in enumerate(records)]

        session = NewSession(
            teacher_id=int(owner_id),
            subject=subject,
            section=_label(section, DEFAULT_SECTION),
            session_date=today or today_local(),
            session_type=_label(session_type, DEFAULT_SESSION_TYPE),
            meta=meta,
        )

        session_id = self._sessions.create_session_with_records(session=session, records=parsed)
        logger.info(
            "Attendance session saved - id: %s, teacher: %s, subject: %s, section: %s, students: %s",
            session_id,
            session.teacher_id,
            session.subject,
            session.section,
            len(parsed),
        )
        return session_id
