from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, time
from typing import Optional, Sequence

import pytest
from werkzeug.security import generate_password_hash

from tuition_attendance.attendance.model import AttendanceRecord
from tuition_attendance.batches.model import Batch, BatchWithDetails
from tuition_attendance.container import Container, wire_services
from tuition_attendance.core.enums import AttendanceStatus, SessionStatus
from tuition_attendance.sessions.model import Session
from tuition_attendance.students.model import Student
from tuition_attendance.users.model import Admin, Teacher

GUARDIAN_MOBILE = "9876543210"


class InMemoryAdmins:
    def __init__(self):
        self._by_id: dict[int, Admin] = {}

    def get_by_email(self, email: str) -> Optional[Admin]:
        return next((a for a in self._by_id.values() if a.email == email), None)

    def create(self, *, email: str, name: str, password_hash: str) -> int:
        admin_id = len(self._by_id) + 1
        self._by_id[admin_id] = Admin(admin_id=admin_id, email=email, name=name, password_hash=password_hash)
        return admin_id

    def count(self) -> int:
        return len(self._by_id)


class InMemoryTeachers:
    def __init__(self):
        self._by_id: dict[int, Teacher] = {}

    def get_by_id(self, teacher_pk: int) -> Optional[Teacher]:
        return self._by_id.get(int(teacher_pk))

    def get_by_code(self, teacher_code: str) -> Optional[Teacher]:
        return next((t for t in self._by_id.values() if t.teacher_code == teacher_code), None)

    def create(self, *, teacher_code: str, name: str, password_hash: str) -> int:
        pk = len(self._by_id) + 1
        self._by_id[pk] = Teacher(teacher_pk=pk, teacher_code=teacher_code, name=name, password_hash=password_hash)
        return pk

    def list_all(self) -> Sequence[Teacher]:
        return sorted(self._by_id.values(), key=lambda t: t.name)

    def count(self) -> int:
        return len(self._by_id)


class InMemoryStudents:
    def __init__(self):
        self._by_id: dict[int, Student] = {}

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._by_id.get(int(student_id))

    def create(self, *, name: str, batch_id: int, guardian_mobile: str) -> int:
        sid = len(self._by_id) + 1
        self._by_id[sid] = Student(student_id=sid, name=name, batch_id=int(batch_id), guardian_mobile=guardian_mobile)
        return sid

    def list_all(self) -> Sequence[Student]:
        return sorted(self._by_id.values(), key=lambda s: s.name)

    def list_by_batch(self, batch_id: int) -> Sequence[Student]:
        return [s for s in self.list_all() if s.batch_id == int(batch_id)]

    def list_by_guardian_mobile(self, mobile: str) -> Sequence[Student]:
        return [s for s in self.list_all() if s.guardian_mobile == mobile]

    def count(self) -> int:
        return len(self._by_id)


class InMemorySessions:
    def __init__(self):
        self._by_id: dict[int, Session] = {}

    def put(self, session: Session) -> Session:
        """Test helper: store a session as-is (any status/published_at)."""
        self._by_id[session.session_id] = session
        return session

    def get_by_id(self, session_id: int) -> Optional[Session]:
        return self._by_id.get(int(session_id))

    def create(self, *, batch_id: int, teacher_id: int, session_date: date, session_time: time) -> int:
        sid = max(self._by_id, default=0) + 1
        self._by_id[sid] = Session(
            session_id=sid,
            batch_id=int(batch_id),
            teacher_id=int(teacher_id),
            session_date=session_date,
            session_time=session_time,
        )
        return sid

    def _ordered(self, sessions) -> list[Session]:
        return sorted(sessions, key=lambda s: (s.session_date, s.session_time, s.session_id), reverse=True)

    def list_by_batch(self, batch_id: int) -> Sequence[Session]:
        return self._ordered(s for s in self._by_id.values() if s.batch_id == int(batch_id))

    def list_by_status(self, status: SessionStatus) -> Sequence[Session]:
        return [s for s in self._by_id.values() if s.status == status]

    def list_published_for_batch(self, batch_id: int, *, limit: Optional[int] = None) -> Sequence[Session]:
        items = [s for s in self.list_by_batch(batch_id) if s.status != SessionStatus.DRAFT]
        return items[:limit] if limit is not None else items

    def finalize(self, *, session_id: int, published_at: datetime) -> bool:
        s = self._by_id.get(int(session_id))
        if not s or s.status != SessionStatus.DRAFT:
            return False
        self._by_id[s.session_id] = replace(s, status=SessionStatus.FINALIZED, published_at=published_at)
        return True

    def lock(self, session_ids: Sequence[int]) -> int:
        changed = 0
        for sid in session_ids:
            s = self._by_id.get(int(sid))
            if s and s.status == SessionStatus.FINALIZED:
                self._by_id[s.session_id] = replace(s, status=SessionStatus.LOCKED)
                changed += 1
        return changed

    def count(self) -> int:
        return len(self._by_id)


class InMemoryAttendance:
    def __init__(self):
        self._by_key: dict[tuple[int, int], AttendanceRecord] = {}
        self._id = 0

    def get(self, *, session_id: int, student_id: int) -> Optional[AttendanceRecord]:
        return self._by_key.get((int(session_id), int(student_id)))

    def upsert(self, *, session_id: int, student_id: int, status: AttendanceStatus) -> AttendanceRecord:
        key = (int(session_id), int(student_id))
        existing = self._by_key.get(key)
        if existing:
            record = replace(existing, status=status)
        else:
            self._id += 1
            record = AttendanceRecord(attendance_id=self._id, session_id=key[0], student_id=key[1], status=status)
        self._by_key[key] = record
        return record

    def upsert_many(self, *, session_id: int, student_ids: Sequence[int], status: AttendanceStatus) -> int:
        for student_id in student_ids:
            self.upsert(session_id=session_id, student_id=student_id, status=status)
        return len(student_ids)

    def list_by_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        return [r for (sid, _), r in self._by_key.items() if sid == int(session_id)]

    def list_for_sessions(self, session_ids: Sequence[int], *, student_id: Optional[int] = None):
        wanted = set(session_ids)
        return [
            r
            for r in self._by_key.values()
            if r.session_id in wanted and (student_id is None or r.student_id == student_id)
        ]

    def all(self) -> list[AttendanceRecord]:
        return list(self._by_key.values())


class InMemoryBatches:
    def __init__(self, teachers: InMemoryTeachers, students: InMemoryStudents, sessions: InMemorySessions):
        self._by_id: dict[int, Batch] = {}
        self._teachers = teachers
        self._students = students
        self._sessions = sessions

    def get_by_id(self, batch_id: int) -> Optional[Batch]:
        return self._by_id.get(int(batch_id))

    def create(self, *, name: str, teacher_id: Optional[int], description: Optional[str] = None) -> int:
        bid = len(self._by_id) + 1
        self._by_id[bid] = Batch(batch_id=bid, name=name, teacher_id=teacher_id, description=description)
        return bid

    def list_all(self) -> Sequence[Batch]:
        return sorted(self._by_id.values(), key=lambda b: b.name)

    def list_with_details(self) -> Sequence[BatchWithDetails]:
        out = []
        for b in self.list_all():
            teacher = self._teachers.get_by_id(b.teacher_id) if b.teacher_id else None
            out.append(
                BatchWithDetails(
                    batch=b,
                    teacher_name=teacher.name if teacher else None,
                    student_count=len(self._students.list_by_batch(b.batch_id)),
                    session_count=len(self._sessions.list_by_batch(b.batch_id)),
                )
            )
        return out

    def count(self) -> int:
        return len(self._by_id)


@dataclass
class Repos:
    admins: InMemoryAdmins
    teachers: InMemoryTeachers
    batches: InMemoryBatches
    students: InMemoryStudents
    sessions: InMemorySessions
    attendance: InMemoryAttendance


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 10, 9, 0, 0)


@pytest.fixture
def repos() -> Repos:
    """One admin, one teacher, two batches; batch 1 has three students."""
    teachers = InMemoryTeachers()
    students = InMemoryStudents()
    sessions = InMemorySessions()
    r = Repos(
        admins=InMemoryAdmins(),
        teachers=teachers,
        batches=InMemoryBatches(teachers, students, sessions),
        students=students,
        sessions=sessions,
        attendance=InMemoryAttendance(),
    )

    r.admins.create(email="admin@tuition.local", name="Admin Demo", password_hash=generate_password_hash("admin123"))
    teacher_pk = r.teachers.create(teacher_code="T001", name="Teacher Demo", password_hash=generate_password_hash("teacher123"))
    r.batches.create(name="Class 10 - Maths", teacher_id=teacher_pk, description="Evening")
    r.batches.create(name="Class 12 - Physics", teacher_id=None)
    r.students.create(name="Asha", batch_id=1, guardian_mobile=GUARDIAN_MOBILE)
    r.students.create(name="Bilal", batch_id=1, guardian_mobile=GUARDIAN_MOBILE)
    r.students.create(name="Chen", batch_id=1, guardian_mobile="9123456780")
    return r


@pytest.fixture
def container(repos: Repos) -> Container:
    return wire_services(
        conn=None,
        admins_repo=repos.admins,
        teachers_repo=repos.teachers,
        batches_repo=repos.batches,
        students_repo=repos.students,
        sessions_repo=repos.sessions,
        attendance_repo=repos.attendance,
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    from tuition_attendance.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    resp = client.post("/api/admin/login", json={"email": "admin@tuition.local", "password": "admin123"})
    assert resp.status_code == 200
    return client


@pytest.fixture
def teacher_client(client):
    resp = client.post("/api/teacher/login", json={"teacher_code": "T001", "password": "teacher123"})
    assert resp.status_code == 200
    return client
