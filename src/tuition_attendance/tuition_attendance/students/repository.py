from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def create(self, *, name: str, batch_id: int, guardian_mobile: str) -> int:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def list_by_batch(self, batch_id: int) -> Sequence[Student]:
        raise NotImplementedError

    def list_by_guardian_mobile(self, mobile: str) -> Sequence[Student]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
