from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..batches.repository import BatchRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_positive_id
from ..core.constants import LOCK_AFTER_HOURS
from ..core.enums import AttendanceStatus, SessionStatus
from ..core.exceptions import DomainError, InvalidTransitionError, NotFoundError, ValidationError
from ..students.repository import StudentRepository
from ..users.repository import TeacherRepository
from .lifecycle import ensure_finalizable, ensure_writable, next_status
from .model import Session
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class SessionLifecycleService:
    """Use cases around a session's lifecycle and the attendance written to it.

    Every entry point that returns session status or writes attendance runs
    the lock sweep first, so a FINALIZED session older than the lock window
    is never served or written as FINALIZED.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        attendance: AttendanceRepository,
        students: StudentRepository,
        batches: BatchRepository,
        teachers: TeacherRepository,
        *,
        lock_after_hours: float = LOCK_AFTER_HOURS,
    ):
        self._sessions = sessions
        self._attendance = attendance
        self._students = students
        self._batches = batches
        self._teachers = teachers
        self._lock_after = timedelta(hours=lock_after_hours)

    @staticmethod
    def _parse_status(value) -> AttendanceStatus:
        try:
            return AttendanceStatus(value)
        except ValueError:
            raise ValidationError("Invalid attendance status")

    def _require_session(self, session_id: int) -> Session:
        session = self._sessions.get_by_id(int(session_id))
        if not session:
            raise NotFoundError("Session not found")
        return session

    def sweep_expired_sessions(self, now: Optional[datetime] = None) -> int:
        """Lock every FINALIZED session published at least `lock_after` ago.

        Safe to call repeatedly: DRAFT and LOCKED sessions are never touched.
        Returns the number of sessions locked by this call.
        """
        now = now or now_local()

        expired = [
            s.session_id
            for s in self._sessions.list_by_status(SessionStatus.FINALIZED)
            if next_status(s, now, lock_after=self._lock_after) == SessionStatus.LOCKED
        ]
        if not expired:
            return 0

        locked = self._sessions.lock(expired)
        logger.info("Lock sweep at %s locked %d session(s): %s", now.isoformat(), locked, expired)
        return locked

    def create_session(
        self,
        *,
        batch_id: int,
        teacher_id: int,
        session_date: date,
        session_time: time,
    ) -> Session:
        batch_id = require_positive_id(batch_id, "Batch")
        teacher_id = require_positive_id(teacher_id, "Teacher")
        if not isinstance(session_date, date) or isinstance(session_date, datetime):
            raise ValidationError("Invalid session date")
        if not isinstance(session_time, time):
            raise ValidationError("Invalid session time")

        if not self._batches.get_by_id(batch_id):
            raise NotFoundError("Batch not found")
        if not self._teachers.get_by_id(teacher_id):
            raise NotFoundError("Teacher not found")

        session_id = self._sessions.create(
            batch_id=batch_id,
            teacher_id=teacher_id,
            session_date=session_date,
            session_time=session_time,
        )
        logger.info("Session %s created for batch %s on %s %s", session_id, batch_id, session_date, session_time)
        return self._require_session(session_id)

    def get_session(self, session_id: int, *, now: Optional[datetime] = None) -> Session:
        self.sweep_expired_sessions(now)
        return self._require_session(session_id)

    def list_sessions_for_batch(self, batch_id: int, *, now: Optional[datetime] = None) -> Sequence[Session]:
        self.sweep_expired_sessions(now)
        return self._sessions.list_by_batch(int(batch_id))

    def finalize(self, session_id: int, *, now: Optional[datetime] = None) -> Session:
        """DRAFT -> FINALIZED. Any later call fails; callers must not retry blindly."""
        now = now or now_local()
        self.sweep_expired_sessions(now)

        session = self._require_session(session_id)
        ensure_finalizable(session)

        # Compare-and-set on DRAFT: a concurrent finalize loses here.
        if not self._sessions.finalize(session_id=session.session_id, published_at=now):
            raise InvalidTransitionError("Session is already finalized or locked")

        logger.info("Session %s finalized at %s", session.session_id, now.isoformat())
        return self._require_session(session.session_id)

    def mark_attendance(
        self,
        session_id: int,
        student_id: int,
        status,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = now or now_local()
        status = self._parse_status(status)
        self.sweep_expired_sessions(now)

        session = self._require_session(session_id)
        student = self._students.get_by_id(require_positive_id(student_id, "Student"))
        if not student:
            raise NotFoundError("Student not found")
        if student.batch_id != session.batch_id:
            raise ValidationError("Student is not enrolled in this session's batch")

        # Re-read status right before the write so a session locked since the
        # sweep above is not written.
        session = self._require_session(session.session_id)
        try:
            ensure_writable(session, now, lock_after=self._lock_after)
        except DomainError as e:
            logger.warning("Rejected attendance write to session %s: %s", session.session_id, e)
            raise

        return self._attendance.upsert(session_id=session.session_id, student_id=student.student_id, status=status)

    def bulk_mark_attendance(self, session_id: int, status, *, now: Optional[datetime] = None) -> int:
        """Mark every student of the session's batch. Rejected as a whole before any write."""
        now = now or now_local()
        status = self._parse_status(status)
        self.sweep_expired_sessions(now)

        session = self._require_session(session_id)
        try:
            ensure_writable(session, now, lock_after=self._lock_after)
        except DomainError as e:
            logger.warning("Rejected bulk attendance write to session %s: %s", session.session_id, e)
            raise

        student_ids = [s.student_id for s in self._students.list_by_batch(session.batch_id)]
        written = self._attendance.upsert_many(session_id=session.session_id, student_ids=student_ids, status=status)
        logger.info("Bulk marked %d student(s) %s in session %s", written, status.value, session.session_id)
        return written

    def list_attendance(self, session_id: int) -> Sequence[AttendanceRecord]:
        session = self._require_session(session_id)
        return self._attendance.list_by_session(session.session_id)
