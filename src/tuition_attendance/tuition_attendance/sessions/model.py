from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import SessionStatus


@dataclass(frozen=True)
class Session:
    """Domain entity: one scheduled class occurrence for which attendance is taken.

    `published_at` is set when the session is finalized and is present exactly
    when the status is FINALIZED or LOCKED.
    """

    session_id: int
    batch_id: int
    teacher_id: int
    session_date: date
    session_time: time
    status: SessionStatus = SessionStatus.DRAFT
    published_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        published = self.status != SessionStatus.DRAFT
        if published != (self.published_at is not None):
            raise ValueError(
                f"Session {self.session_id}: published_at must be set iff status is FINALIZED or LOCKED"
            )
