from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Teacher
from .repository import TeacherRepository


def _row_to_teacher(r: dict) -> Teacher:
    return Teacher(
        teacher_pk=int(r["teacher_pk"]),
        teacher_code=r["teacher_code"],
        name=r["name"],
        password_hash=r["password_hash"],
    )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, teacher_pk: int) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT teacher_pk, teacher_code, name, password_hash FROM teachers WHERE teacher_pk=%s",
                (int(teacher_pk),),
            )
            r = fetchone(cur)
            return _row_to_teacher(r) if r else None

    def get_by_code(self, teacher_code: str) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT teacher_pk, teacher_code, name, password_hash FROM teachers WHERE teacher_code=%s",
                (teacher_code,),
            )
            r = fetchone(cur)
            return _row_to_teacher(r) if r else None

    def create(self, *, teacher_code: str, name: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO teachers(teacher_code, name, password_hash) VALUES(%s,%s,%s)",
                (teacher_code, name, password_hash),
            )
            return int(cur.lastrowid)

    def list_all(self) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT teacher_pk, teacher_code, name, password_hash FROM teachers ORDER BY name")
            return [_row_to_teacher(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM teachers")
            return int(fetchone(cur)["n"])
