from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, placeholders
from .model import AttendanceRecord
from .repository import AttendanceRepository

# Relies on UNIQUE(session_id, student_id); see database/schema.sql.
_UPSERT_SQL = """
    INSERT INTO attendance(session_id, student_id, status)
    VALUES(%s,%s,%s)
    ON DUPLICATE KEY UPDATE status=VALUES(status)
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        session_id=int(r["session_id"]),
        student_id=int(r["student_id"]),
        status=AttendanceStatus(r["status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, session_id: int, student_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, session_id, student_id, status
                FROM attendance
                WHERE session_id=%s AND student_id=%s
                """,
                (int(session_id), int(student_id)),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def upsert(self, *, session_id: int, student_id: int, status: AttendanceStatus) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_UPSERT_SQL, (int(session_id), int(student_id), status.value))
            cur.execute(
                """
                SELECT attendance_id, session_id, student_id, status
                FROM attendance
                WHERE session_id=%s AND student_id=%s
                """,
                (int(session_id), int(student_id)),
            )
            return _row_to_record(fetchone(cur))

    def upsert_many(self, *, session_id: int, student_ids: Sequence[int], status: AttendanceStatus) -> int:
        if not student_ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                _UPSERT_SQL,
                [(int(session_id), int(student_id), status.value) for student_id in student_ids],
            )
            return len(student_ids)

    def list_by_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, session_id, student_id, status
                FROM attendance
                WHERE session_id=%s
                ORDER BY student_id
                """,
                (int(session_id),),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_sessions(
        self,
        session_ids: Sequence[int],
        *,
        student_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        if not session_ids:
            return []

        clauses = [f"session_id IN ({placeholders(len(session_ids))})"]
        params: list[object] = [int(s) for s in session_ids]
        if student_id is not None:
            clauses.append("student_id=%s")
            params.append(int(student_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT attendance_id, session_id, student_id, status
                FROM attendance
                WHERE {where}
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
