from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Admin, Teacher


class AdminRepository(Protocol):
    """Repository interface for Admin.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_email(self, email: str) -> Optional[Admin]:
        raise NotImplementedError

    def create(self, *, email: str, name: str, password_hash: str) -> int:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError


class TeacherRepository(Protocol):
    def get_by_id(self, teacher_pk: int) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_code(self, teacher_code: str) -> Optional[Teacher]:
        raise NotImplementedError

    def create(self, *, teacher_code: str, name: str, password_hash: str) -> int:
        raise NotImplementedError

    def list_all(self) -> Sequence[Teacher]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
