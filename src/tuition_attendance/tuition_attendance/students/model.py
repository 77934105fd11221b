from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Student:
    """Domain entity: a student enrolled in exactly one batch."""

    student_id: int
    name: str
    batch_id: int
    guardian_mobile: str
