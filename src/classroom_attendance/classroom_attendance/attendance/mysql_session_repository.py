from __future__ import annotations

import logging
from typing import Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import NotFoundError
from ..database.mysql_base import Store
from .model import NewSession, RecordInput
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class MySQLSessionRepository(SessionRepository):
    def __init__(self, store: Store):
        self._store = store

    def create_session_with_records(self, *, session: NewSession, records: Sequence[RecordInput]) -> int:
        with self._store.transaction() as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_sessions(
                    teacher_id, subject, section, session_date, session_type,
                    start_time, end_time, total_duration, total_students
                ) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    session.teacher_id,
                    session.subject,
                    session.section,
                    session.session_date,
                    session.session_type,
                    session.meta.start_time,
                    session.meta.end_time,
                    session.meta.duration_minutes,
                    len(records),
                ),
            )
            session_id = int(cur.lastrowid)

            for record in records:
                try:
                    cur.execute(
                        """
                        INSERT INTO attendance_records(
                            session_id, student_id, status, detection_count,
                            confidence_score, first_detection_time, last_detection_time
                        ) VALUES(%s,%s,%s,%s,%s,%s,%s)
                        """,
                        (
                            session_id,
                            record.student_id,
                            record.status.value,
                            record.detection_count,
                            record.confidence_score,
                            record.first_detection_time,
                            record.last_detection_time,
                        ),
                    )
                except mysql.connector.IntegrityError as exc:
                    if exc.errno == errorcode.ER_NO_REFERENCED_ROW_2:
                        logger.warning("Attendance record references unknown student: %s", record.student_id)
                        raise NotFoundError(f"Unknown student {record.student_id}") from exc
                    raise

            return session_id
