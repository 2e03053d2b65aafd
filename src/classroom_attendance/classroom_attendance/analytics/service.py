from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import today_local
from ..core.constants import (
    ENGAGEMENT_WINDOW_DAYS,
    RISK_THRESHOLD_PERCENT,
    RISK_WINDOW_DAYS,
    TREND_WINDOW_DAYS,
)
from .model import ActivityRow, AnalyticsReport, RiskStudent, SectionEngagement, TrendPoint
from .repository import AnalyticsRepository


def _mean(values: list[float], digits: int) -> Optional[float]:
    if not values:
        return None
    return round(sum(values) / len(values), digits)


class AnalyticsService:
    """Read-only analytics over recorded sessions.

    The repository returns one snapshot covering the widest window; trend,
    engagement and at-risk views are shaped from that snapshot so the three
    result sets are always mutually consistent.
    """

    def __init__(
        self,
        analytics: AnalyticsRepository,
        *,
        trend_days: int = TREND_WINDOW_DAYS,
        engagement_days: int = ENGAGEMENT_WINDOW_DAYS,
        risk_days: int = RISK_WINDOW_DAYS,
        risk_threshold: float = RISK_THRESHOLD_PERCENT,
    ):
        self._analytics = analytics
        self._trend_days = int(trend_days)
        self._engagement_days = int(engagement_days)
        self._risk_days = int(risk_days)
        self._risk_threshold = float(risk_threshold)

    def get_analytics(self, *, today: Optional[date] = None) -> AnalyticsReport:
        today = today or today_local()
        horizon = max(self._trend_days, self._engagement_days, self._risk_days)
        rows = self._analytics.get_activity_since(today - timedelta(days=horizon))

        return AnalyticsReport(
            trends=self.build_trends(rows, since=today - timedelta(days=self._trend_days)),
            engagement=self.build_engagement(rows, since=today - timedelta(days=self._engagement_days)),
            risk_students=self.build_risk_students(rows, since=today - timedelta(days=self._risk_days)),
        )

    def build_trends(self, rows: Sequence[ActivityRow], *, since: date) -> list[TrendPoint]:
        # Partial attendance counts as 0 here; empty sessions contribute a single 0.
        by_date: dict[date, tuple[set[int], list[float]]] = {}
        for r in rows:
            if r.session_date < since:
                continue
            sessions, scores = by_date.setdefault(r.session_date, (set(), []))
            sessions.add(r.session_id)
            scores.append(100.0 if r.status is not None and r.status.counts_as_present else 0.0)

        return [
            TrendPoint(session_date=d, total_sessions=len(sessions), attendance_rate=_mean(scores, 2))
            for d, (sessions, scores) in sorted(by_date.items())
        ]

    def build_engagement(self, rows: Sequence[ActivityRow], *, since: date) -> list[SectionEngagement]:
        by_section: dict[str, dict] = {}
        for r in rows:
            if r.session_date < since or r.status is None:
                continue
            acc = by_section.setdefault(r.section, {"scores": [], "present": 0, "total": 0})
            if r.confidence_score is not None:
                acc["scores"].append(r.confidence_score)
            acc["total"] += 1
            if r.status.counts_as_present:
                acc["present"] += 1

        return [
            SectionEngagement(
                section=section,
                avg_engagement=_mean(acc["scores"], 3),
                present_count=acc["present"],
                total_count=acc["total"],
            )
            for section, acc in sorted(by_section.items())
        ]

    def build_risk_students(self, rows: Sequence[ActivityRow], *, since: date) -> list[RiskStudent]:
        by_student: dict[str, dict] = {}
        for r in rows:
            if r.session_date < since or r.student_id is None or r.status is None:
                continue
            acc = by_student.setdefault(r.student_id, {"name": r.full_name, "present": 0, "total": 0})
            acc["total"] += 1
            if r.status.counts_as_present:
                acc["present"] += 1

        at_risk = []
        for student_id, acc in by_student.items():
            percentage = acc["present"] * 100.0 / acc["total"]
            if percentage < self._risk_threshold:
                at_risk.append(
                    RiskStudent(
                        student_id=student_id,
                        full_name=acc["name"],
                        total_sessions=acc["total"],
                        attended_sessions=acc["present"],
                        attendance_percentage=round(percentage, 2),
                    )
                )

        at_risk.sort(key=lambda s: (s.attendance_percentage, s.student_id))
        return at_risk
