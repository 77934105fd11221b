from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get(self, *, session_id: int, student_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(self, *, session_id: int, student_id: int, status: AttendanceStatus) -> AttendanceRecord:
        """Create the (session, student) record or overwrite its status."""

        raise NotImplementedError

    def upsert_many(self, *, session_id: int, student_ids: Sequence[int], status: AttendanceStatus) -> int:
        """Upsert one record per student in a single transaction. Returns count written."""

        raise NotImplementedError

    def list_by_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_sessions(
        self,
        session_ids: Sequence[int],
        *,
        student_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
