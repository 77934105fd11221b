from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Batch, BatchWithDetails
from .repository import BatchRepository


def _row_to_batch(r: dict) -> Batch:
    teacher_id = r.get("teacher_id")
    return Batch(
        batch_id=int(r["batch_id"]),
        name=r["name"],
        teacher_id=int(teacher_id) if teacher_id is not None else None,
        description=r.get("description"),
    )


class MySQLBatchRepository(BatchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, batch_id: int) -> Optional[Batch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT batch_id, name, teacher_id, description FROM batches WHERE batch_id=%s",
                (int(batch_id),),
            )
            r = fetchone(cur)
            return _row_to_batch(r) if r else None

    def create(self, *, name: str, teacher_id: Optional[int], description: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO batches(name, teacher_id, description) VALUES(%s,%s,%s)",
                (name, teacher_id, description),
            )
            return int(cur.lastrowid)

    def list_all(self) -> Sequence[Batch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT batch_id, name, teacher_id, description FROM batches ORDER BY name")
            return [_row_to_batch(r) for r in fetchall(cur)]

    def list_with_details(self) -> Sequence[BatchWithDetails]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    b.batch_id, b.name, b.teacher_id, b.description,
                    t.name AS teacher_name,
                    (SELECT COUNT(*) FROM students s WHERE s.batch_id = b.batch_id) AS student_count,
                    (SELECT COUNT(*) FROM sessions se WHERE se.batch_id = b.batch_id) AS session_count
                FROM batches b
                LEFT JOIN teachers t ON t.teacher_pk = b.teacher_id
                ORDER BY b.name
                """
            )
            return [
                BatchWithDetails(
                    batch=_row_to_batch(r),
                    teacher_name=r.get("teacher_name"),
                    student_count=int(r.get("student_count") or 0),
                    session_count=int(r.get("session_count") or 0),
                )
                for r in fetchall(cur)
            ]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM batches")
            return int(fetchone(cur)["n"])
