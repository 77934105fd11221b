from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from ..core.enums import SessionStatus
from .model import Session


class SessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[Session]:
        raise NotImplementedError

    def create(self, *, batch_id: int, teacher_id: int, session_date: date, session_time: time) -> int:
        """Insert a DRAFT session. Returns session_id."""

        raise NotImplementedError

    def list_by_batch(self, batch_id: int) -> Sequence[Session]:
        """All sessions of a batch, most recent date first."""

        raise NotImplementedError

    def list_by_status(self, status: SessionStatus) -> Sequence[Session]:
        raise NotImplementedError

    def list_published_for_batch(self, batch_id: int, *, limit: Optional[int] = None) -> Sequence[Session]:
        """Non-DRAFT sessions of a batch, most recent date first."""

        raise NotImplementedError

    def finalize(self, *, session_id: int, published_at: datetime) -> bool:
        """DRAFT -> FINALIZED. Returns False when the session is not DRAFT."""

        raise NotImplementedError

    def lock(self, session_ids: Sequence[int]) -> int:
        """FINALIZED -> LOCKED for the given ids. Returns number of rows changed."""

        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
