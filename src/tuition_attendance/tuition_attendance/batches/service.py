from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty, require_positive_id
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..users.repository import TeacherRepository
from .model import Batch, BatchWithDetails
from .repository import BatchRepository

logger = logging.getLogger(__name__)


class BatchService:
    def __init__(self, batches: BatchRepository, teachers: TeacherRepository):
        self._batches = batches
        self._teachers = teachers

    def create_batch(
        self,
        *,
        current_role: Role,
        name: str,
        teacher_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> Batch:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can create batches")

        name = require_non_empty(name, "Batch name")
        if teacher_id is not None:
            teacher_id = require_positive_id(teacher_id, "Teacher")
            if not self._teachers.get_by_id(teacher_id):
                raise NotFoundError("Teacher not found")
        description = description.strip() if description and description.strip() else None

        batch_id = self._batches.create(name=name, teacher_id=teacher_id, description=description)
        logger.info("Batch %s created (id=%s)", name, batch_id)
        return Batch(batch_id=batch_id, name=name, teacher_id=teacher_id, description=description)

    def get_batch(self, batch_id: int) -> Batch:
        batch = self._batches.get_by_id(int(batch_id))
        if not batch:
            raise NotFoundError("Batch not found")
        return batch

    def list_with_details(self) -> Sequence[BatchWithDetails]:
        return self._batches.list_with_details()

    def list_for_teacher(self, teacher_id: int) -> Sequence[Batch]:
        # Any teacher may take attendance for any batch.
        return self._batches.list_all()
