from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.aggregator import AttendanceAggregator
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .batches.mysql_batch_repository import MySQLBatchRepository
from .batches.repository import BatchRepository
from .batches.service import BatchService
from .core.constants import DEFAULT_HEATMAP_LIMIT, LOCK_AFTER_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import StatsService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionLifecycleService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .users.mysql_admin_repository import MySQLAdminRepository
from .users.mysql_teacher_repository import MySQLTeacherRepository
from .users.repository import AdminRepository, TeacherRepository
from .users.service import AccountService, AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    admins_repo: AdminRepository
    teachers_repo: TeacherRepository
    batches_repo: BatchRepository
    students_repo: StudentRepository
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    account_service: AccountService
    batch_service: BatchService
    student_service: StudentService
    session_service: SessionLifecycleService
    aggregator: AttendanceAggregator
    stats_service: StatsService


def wire_services(
    *,
    conn: Optional[DatabaseConnection],
    admins_repo: AdminRepository,
    teachers_repo: TeacherRepository,
    batches_repo: BatchRepository,
    students_repo: StudentRepository,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    lock_after_hours: float = LOCK_AFTER_HOURS,
    heatmap_limit: int = DEFAULT_HEATMAP_LIMIT,
) -> Container:
    """Build services on top of any repository implementations."""
    return Container(
        conn=conn,
        admins_repo=admins_repo,
        teachers_repo=teachers_repo,
        batches_repo=batches_repo,
        students_repo=students_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(admins_repo, teachers_repo, students_repo),
        account_service=AccountService(admins_repo, teachers_repo),
        batch_service=BatchService(batches_repo, teachers_repo),
        student_service=StudentService(students_repo, batches_repo),
        session_service=SessionLifecycleService(
            sessions_repo,
            attendance_repo,
            students_repo,
            batches_repo,
            teachers_repo,
            lock_after_hours=lock_after_hours,
        ),
        aggregator=AttendanceAggregator(
            students_repo,
            sessions_repo,
            attendance_repo,
            heatmap_limit=heatmap_limit,
        ),
        stats_service=StatsService(teachers_repo, batches_repo, students_repo, sessions_repo),
    )


def build_container(
    *,
    db_config: dict,
    lock_after_hours: float = LOCK_AFTER_HOURS,
    heatmap_limit: int = DEFAULT_HEATMAP_LIMIT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        conn=conn,
        admins_repo=MySQLAdminRepository(conn),
        teachers_repo=MySQLTeacherRepository(conn),
        batches_repo=MySQLBatchRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        lock_after_hours=lock_after_hours,
        heatmap_limit=heatmap_limit,
    )
