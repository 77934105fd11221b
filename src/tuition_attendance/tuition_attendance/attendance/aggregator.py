from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.constants import DEFAULT_HEATMAP_LIMIT, LEADERBOARD_SIZE
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..sessions.repository import SessionRepository
from ..students.repository import StudentRepository
from .model import HeatmapEntry, StudentAttendanceSummary, StudentWithAttendance
from .repository import AttendanceRepository


def rank_leaderboard(
    students: Iterable[StudentWithAttendance],
    *,
    size: int = LEADERBOARD_SIZE,
) -> list[StudentWithAttendance]:
    """Top `size` by percentage, ties broken by present sessions (both descending)."""
    ranked = sorted(students, key=lambda s: (-s.attendance_percentage, -s.present_sessions))
    return ranked[:size]


class AttendanceAggregator:
    """Attendance percentages and history, recomputed from storage on every call.

    Only non-DRAFT sessions count. A session without a record for the student
    counts towards the total but not as present.
    """

    def __init__(
        self,
        students: StudentRepository,
        sessions: SessionRepository,
        attendance: AttendanceRepository,
        *,
        heatmap_limit: int = DEFAULT_HEATMAP_LIMIT,
    ):
        self._students = students
        self._sessions = sessions
        self._attendance = attendance
        self._heatmap_limit = int(heatmap_limit)

    def compute_summary(self, student_id: int) -> StudentAttendanceSummary:
        return self.student_with_attendance(student_id).summary

    def student_with_attendance(self, student_id: int) -> StudentWithAttendance:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")

        sessions = self._sessions.list_published_for_batch(student.batch_id)
        session_ids = [s.session_id for s in sessions]
        records = self._attendance.list_for_sessions(session_ids, student_id=student.student_id)

        present = self._count_present(records, session_ids)
        return StudentWithAttendance(
            student=student,
            summary=StudentAttendanceSummary.from_counts(present, len(session_ids)),
        )

    def compute_heatmap(self, student_id: int, limit: Optional[int] = None) -> list[HeatmapEntry]:
        """Most recent non-DRAFT sessions first; `limit` never exceeds the configured heatmap limit."""
        limit = self._heatmap_limit if limit is None else int(limit)
        if limit < 1:
            raise ValidationError("Heatmap limit must be positive")
        limit = min(limit, self._heatmap_limit)

        student = self._students.get_by_id(int(student_id))
        if not student:
            return []

        sessions = self._sessions.list_published_for_batch(student.batch_id, limit=limit)[:limit]
        records = self._attendance.list_for_sessions(
            [s.session_id for s in sessions],
            student_id=student.student_id,
        )
        status_by_session = {r.session_id: r.status for r in records}

        return [
            HeatmapEntry(
                session_id=s.session_id,
                session_date=s.session_date,
                session_time=s.session_time,
                status=status_by_session.get(s.session_id, AttendanceStatus.NOT_MARKED),
            )
            for s in sessions
        ]

    def batch_analytics(self, batch_id: int) -> list[StudentWithAttendance]:
        """Every student of the batch with a summary; one session and one attendance query."""
        students = self._students.list_by_batch(int(batch_id))
        sessions = self._sessions.list_published_for_batch(int(batch_id))
        session_ids = [s.session_id for s in sessions]

        present_by_student: dict[int, int] = {}
        valid = set(session_ids)
        for r in self._attendance.list_for_sessions(session_ids):
            if r.status == AttendanceStatus.PRESENT and r.session_id in valid:
                present_by_student[r.student_id] = present_by_student.get(r.student_id, 0) + 1

        return [
            StudentWithAttendance(
                student=st,
                summary=StudentAttendanceSummary.from_counts(present_by_student.get(st.student_id, 0), len(session_ids)),
            )
            for st in students
        ]

    def batch_leaderboard(self, batch_id: int, *, size: int = LEADERBOARD_SIZE) -> list[StudentWithAttendance]:
        return rank_leaderboard(self.batch_analytics(batch_id), size=size)

    @staticmethod
    def _count_present(records, session_ids: Sequence[int]) -> int:
        valid = set(session_ids)
        return sum(1 for r in records if r.session_id in valid and r.status == AttendanceStatus.PRESENT)
