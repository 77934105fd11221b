from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time

from ..core.enums import AttendanceStatus
from ..students.model import Student


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: attendance mark of one student for one session."""

    attendance_id: int
    session_id: int
    student_id: int
    status: AttendanceStatus


@dataclass(frozen=True)
class StudentAttendanceSummary:
    """Derived: computed over the non-DRAFT sessions of the student's batch."""

    present_sessions: int
    total_sessions: int
    attendance_percentage: float

    @classmethod
    def from_counts(cls, present_sessions: int, total_sessions: int) -> "StudentAttendanceSummary":
        percentage = (present_sessions / total_sessions) * 100 if total_sessions > 0 else 0.0
        return cls(
            present_sessions=present_sessions,
            total_sessions=total_sessions,
            attendance_percentage=percentage,
        )


@dataclass(frozen=True)
class StudentWithAttendance:
    """Read-model: student plus summary, used by analytics and the leaderboard."""

    student: Student
    summary: StudentAttendanceSummary

    @property
    def attendance_percentage(self) -> float:
        return self.summary.attendance_percentage

    @property
    def present_sessions(self) -> int:
        return self.summary.present_sessions


@dataclass(frozen=True)
class HeatmapEntry:
    session_id: int
    session_date: date
    session_time: time
    status: AttendanceStatus
