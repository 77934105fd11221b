from __future__ import annotations

import logging
from typing import Sequence

from ..batches.repository import BatchRepository
from ..common.validators import require_non_empty, require_positive_id
from ..core.constants import MIN_GUARDIAN_MOBILE_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    def __init__(self, students: StudentRepository, batches: BatchRepository):
        self._students = students
        self._batches = batches

    def create_student(self, *, current_role: Role, name: str, batch_id: int, guardian_mobile: str) -> Student:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can add students")

        name = require_non_empty(name, "Name")
        batch_id = require_positive_id(batch_id, "Batch")
        guardian_mobile = require_non_empty(guardian_mobile, "Guardian mobile")
        if len(guardian_mobile) < MIN_GUARDIAN_MOBILE_LENGTH:
            raise ValidationError(f"Guardian mobile must be at least {MIN_GUARDIAN_MOBILE_LENGTH} digits")

        if not self._batches.get_by_id(batch_id):
            raise NotFoundError("Batch not found")

        student_id = self._students.create(name=name, batch_id=batch_id, guardian_mobile=guardian_mobile)
        logger.info("Student %s added to batch %s", student_id, batch_id)
        return Student(student_id=student_id, name=name, batch_id=batch_id, guardian_mobile=guardian_mobile)

    def get_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        return student

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def list_for_batch(self, batch_id: int) -> Sequence[Student]:
        return self._students.list_by_batch(int(batch_id))

    def list_for_guardian(self, mobile: str) -> Sequence[Student]:
        mobile = require_non_empty(mobile, "Mobile number")
        return self._students.list_by_guardian_mobile(mobile)
