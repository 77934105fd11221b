from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_GUARDIAN_MOBILE_LENGTH, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import Admin, Teacher
from .repository import AdminRepository, TeacherRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionAccount:
    """What we store into the Flask session after login."""

    account_id: int
    name: str
    role: Role


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # e.g. placeholder hashes like 'CHANGE_ME' from seed data
        return False


class AuthService:
    """Use case: authenticate admins, teachers and guardians."""

    def __init__(self, admins: AdminRepository, teachers: TeacherRepository, students: StudentRepository):
        self._admins = admins
        self._teachers = teachers
        self._students = students

    def authenticate_admin(self, email: str, password: str) -> SessionAccount:
        email = require_email(email)
        require_non_empty(password, "Password")

        admin = self._admins.get_by_email(email)
        if not admin or not _password_matches(admin.password_hash, password):
            raise AuthenticationError("Invalid email or password")
        return SessionAccount(account_id=admin.admin_id, name=admin.name, role=Role.ADMIN)

    def authenticate_teacher(self, teacher_code: str, password: str) -> SessionAccount:
        teacher_code = require_non_empty(teacher_code, "Teacher ID")
        require_non_empty(password, "Password")

        teacher = self._teachers.get_by_code(teacher_code)
        if not teacher or not _password_matches(teacher.password_hash, password):
            raise AuthenticationError("Invalid teacher ID or password")
        return SessionAccount(account_id=teacher.teacher_pk, name=teacher.name, role=Role.TEACHER)

    def authenticate_guardian(self, mobile: str) -> Sequence[Student]:
        """Guardians log in with the mobile number registered against their children."""
        mobile = require_non_empty(mobile, "Mobile number")
        if len(mobile) < MIN_GUARDIAN_MOBILE_LENGTH:
            raise ValidationError(f"Mobile number must be at least {MIN_GUARDIAN_MOBILE_LENGTH} digits")

        students = self._students.list_by_guardian_mobile(mobile)
        if not students:
            raise NotFoundError("No students linked to this mobile number")
        return students


class AccountService:
    """Use case: manage admin and teacher accounts."""

    def __init__(self, admins: AdminRepository, teachers: TeacherRepository):
        self._admins = admins
        self._teachers = teachers

    def signup_admin(self, *, email: str, name: str, password: str) -> Admin:
        email = require_email(email)
        name = require_non_empty(name, "Name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._admins.get_by_email(email):
            raise ValidationError("Admin with this email already exists")

        admin_id = self._admins.create(email=email, name=name, password_hash=generate_password_hash(password))
        logger.info("Admin %s signed up (id=%s)", email, admin_id)
        return self._admins.get_by_email(email)

    def create_teacher(self, *, current_role: Role, teacher_code: str, name: str, password: str) -> Teacher:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can add teachers")

        teacher_code = require_non_empty(teacher_code, "Teacher ID")
        name = require_non_empty(name, "Name")
        require_non_empty(password, "Password")

        if self._teachers.get_by_code(teacher_code):
            raise ValidationError("Teacher ID already exists")

        teacher_pk = self._teachers.create(
            teacher_code=teacher_code,
            name=name,
            password_hash=generate_password_hash(password),
        )
        logger.info("Teacher %s created (pk=%s)", teacher_code, teacher_pk)
        return self._teachers.get_by_id(teacher_pk)

    def list_teachers(self) -> Sequence[Teacher]:
        return self._teachers.list_all()
