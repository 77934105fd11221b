from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Batch, BatchWithDetails


class BatchRepository(Protocol):
    def get_by_id(self, batch_id: int) -> Optional[Batch]:
        raise NotImplementedError

    def create(self, *, name: str, teacher_id: Optional[int], description: Optional[str] = None) -> int:
        raise NotImplementedError

    def list_all(self) -> Sequence[Batch]:
        raise NotImplementedError

    def list_with_details(self) -> Sequence[BatchWithDetails]:
        """Batches joined with teacher name and student/session counts."""

        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
