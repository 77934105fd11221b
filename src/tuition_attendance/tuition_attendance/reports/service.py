from __future__ import annotations

from dataclasses import dataclass

from ..batches.repository import BatchRepository
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..sessions.repository import SessionRepository
from ..students.repository import StudentRepository
from ..users.repository import TeacherRepository


@dataclass(frozen=True)
class Stats:
    total_teachers: int
    total_batches: int
    total_students: int
    total_sessions: int


class StatsService:
    """Admin dashboard counters."""

    def __init__(
        self,
        teachers: TeacherRepository,
        batches: BatchRepository,
        students: StudentRepository,
        sessions: SessionRepository,
    ):
        self._teachers = teachers
        self._batches = batches
        self._students = students
        self._sessions = sessions

    def get_stats(self, *, current_role: Role) -> Stats:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can view stats")

        return Stats(
            total_teachers=self._teachers.count(),
            total_batches=self._batches.count(),
            total_students=self._students.count(),
            total_sessions=self._sessions.count(),
        )
