from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import AttendanceStatus
from ..database.mysql_base import Store, as_float, fetchall
from .model import ActivityRow
from .repository import AnalyticsRepository


class MySQLAnalyticsRepository(AnalyticsRepository):
    def __init__(self, store: Store):
        self._store = store

    def get_activity_since(self, since: date) -> Sequence[ActivityRow]:
        with self._store.transaction() as (_, cur):
            cur.execute(
                """
                SELECT
                    s.session_id, s.session_date, s.section,
                    ar.student_id, st.full_name, ar.status, ar.confidence_score
                FROM attendance_sessions s
                LEFT JOIN attendance_records ar ON ar.session_id = s.session_id
                LEFT JOIN students st ON st.student_id = ar.student_id
                WHERE s.session_date >= %s
                ORDER BY s.session_date ASC, s.session_id ASC, ar.record_id ASC
                """,
                (since,),
            )
            return [
                ActivityRow(
                    session_id=int(r["session_id"]),
                    session_date=r["session_date"],
                    section=r["section"],
                    student_id=r.get("student_id"),
                    full_name=r.get("full_name"),
                    status=AttendanceStatus(r["status"]) if r.get("status") else None,
                    confidence_score=as_float(r.get("confidence_score")),
                )
                for r in fetchall(cur)
            ]
