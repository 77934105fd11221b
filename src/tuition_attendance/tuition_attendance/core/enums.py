from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    TEACHER = "teacher"
    GUARDIAN = "guardian"


class SessionStatus(str, Enum):
    """Lifecycle state of an attendance session."""

    DRAFT = "DRAFT"
    FINALIZED = "FINALIZED"
    LOCKED = "LOCKED"


class AttendanceStatus(str, Enum):
    """Attendance mark stored per (session, student)."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    NOT_MARKED = "NOT_MARKED"
