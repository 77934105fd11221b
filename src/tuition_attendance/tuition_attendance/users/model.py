from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Admin:
    """Domain entity: center administrator.

    Note: plain data object (no DB access code).
    """

    admin_id: int
    email: str
    name: str
    password_hash: str


@dataclass(frozen=True)
class Teacher:
    """Domain entity: teacher.

    `teacher_code` is the login identifier handed out by the admin;
    `teacher_pk` is the storage key referenced by batches and sessions.
    """

    teacher_pk: int
    teacher_code: str
    name: str
    password_hash: str
