from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class ActivityRow:
    """One session joined with one of its records (record fields are None for empty sessions)."""

    session_id: int
    session_date: date
    section: str
    student_id: Optional[str] = None
    full_name: Optional[str] = None
    status: Optional[AttendanceStatus] = None
    confidence_score: Optional[float] = None


@dataclass(frozen=True)
class TrendPoint:
    session_date: date
    total_sessions: int
    attendance_rate: Optional[float]

    def to_dict(self) -> dict:
        return {
            "session_date": self.session_date.isoformat(),
            "total_sessions": self.total_sessions,
            "attendance_rate": self.attendance_rate,
        }


@dataclass(frozen=True)
class SectionEngagement:
    section: str
    avg_engagement: Optional[float]
    present_count: int
    total_count: int

    def to_dict(self) -> dict:
        return {
            "section": self.section,
            "avg_engagement": self.avg_engagement,
            "present_count": self.present_count,
            "total_count": self.total_count,
        }


@dataclass(frozen=True)
class RiskStudent:
    student_id: str
    full_name: Optional[str]
    total_sessions: int
    attended_sessions: int
    attendance_percentage: float

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "full_name": self.full_name,
            "total_sessions": self.total_sessions,
            "attended_sessions": self.attended_sessions,
            "attendance_percentage": self.attendance_percentage,
        }


@dataclass(frozen=True)
class AnalyticsReport:
    trends: list[TrendPoint] = field(default_factory=list)
    engagement: list[SectionEngagement] = field(default_factory=list)
    risk_students: list[RiskStudent] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "trends": [t.to_dict() for t in self.trends],
            "engagement": [e.to_dict() for e in self.engagement],
            "riskStudents": [r.to_dict() for r in self.risk_students],
        }
