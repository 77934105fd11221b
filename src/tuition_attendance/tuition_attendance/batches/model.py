from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Batch:
    """Domain entity: a recurring class group."""

    batch_id: int
    name: str
    teacher_id: Optional[int]
    description: Optional[str] = None


@dataclass(frozen=True)
class BatchWithDetails:
    """Read-model for the admin batch list."""

    batch: Batch
    teacher_name: Optional[str]
    student_count: int
    session_count: int
