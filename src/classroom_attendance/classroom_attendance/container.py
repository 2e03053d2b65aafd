from __future__ import annotations

from dataclasses import dataclass

from .analytics.mysql_analytics_repository import MySQLAnalyticsRepository
from .analytics.service import AnalyticsService
from .attendance.mysql_session_repository import MySQLSessionRepository
from .attendance.service import SessionRecorder
from .database.connection import DBConfig, DatabaseConnection
from .database.mysql_base import Store
from .students.mysql_student_repository import MySQLStudentRepository
from .students.service import StudentService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, TokenService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    token_service: TokenService
    student_service: StudentService
    session_recorder: SessionRecorder
    analytics_service: AnalyticsService


def build_container(*, db_config: dict, jwt_secret: str) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    store = Store(conn)

    return Container(
        auth_service=AuthService(MySQLUserRepository(store)),
        token_service=TokenService(jwt_secret),
        student_service=StudentService(MySQLStudentRepository(store)),
        session_recorder=SessionRecorder(MySQLSessionRepository(store)),
        analytics_service=AnalyticsService(MySQLAnalyticsRepository(store)),
    )
