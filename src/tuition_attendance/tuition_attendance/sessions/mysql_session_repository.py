from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Sequence

from ..core.enums import SessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    normalize_mysql_date,
    normalize_mysql_time,
    placeholders,
)
from .model import Session
from .repository import SessionRepository

_COLUMNS = "session_id, batch_id, teacher_id, session_date, session_time, status, published_at"
_ORDER = "ORDER BY session_date DESC, session_time DESC, session_id DESC"


def _row_to_session(r: dict) -> Session:
    return Session(
        session_id=int(r["session_id"]),
        batch_id=int(r["batch_id"]),
        teacher_id=int(r["teacher_id"]),
        session_date=normalize_mysql_date(r["session_date"]),
        session_time=normalize_mysql_time(r["session_time"]),
        status=SessionStatus(r["status"]),
        published_at=r.get("published_at"),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _row_to_session(r) if r else None

    def create(self, *, batch_id: int, teacher_id: int, session_date: date, session_time: time) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sessions(batch_id, teacher_id, session_date, session_time, status, published_at)
                VALUES(%s,%s,%s,%s,%s,NULL)
                """,
                (int(batch_id), int(teacher_id), session_date, session_time, SessionStatus.DRAFT.value),
            )
            return int(cur.lastrowid)

    def list_by_batch(self, batch_id: int) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sessions WHERE batch_id=%s {_ORDER}", (int(batch_id),))
            return [_row_to_session(r) for r in fetchall(cur)]

    def list_by_status(self, status: SessionStatus) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sessions WHERE status=%s", (status.value,))
            return [_row_to_session(r) for r in fetchall(cur)]

    def list_published_for_batch(self, batch_id: int, *, limit: Optional[int] = None) -> Sequence[Session]:
        sql = f"SELECT {_COLUMNS} FROM sessions WHERE batch_id=%s AND status<>%s {_ORDER}"
        params: list[object] = [int(batch_id), SessionStatus.DRAFT.value]
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_session(r) for r in fetchall(cur)]

    def finalize(self, *, session_id: int, published_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE sessions
                SET status=%s, published_at=%s
                WHERE session_id=%s AND status=%s
                """,
                (SessionStatus.FINALIZED.value, published_at, int(session_id), SessionStatus.DRAFT.value),
            )
            return cur.rowcount > 0

    def lock(self, session_ids: Sequence[int]) -> int:
        if not session_ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE sessions
                SET status=%s
                WHERE session_id IN ({placeholders(len(session_ids))}) AND status=%s
                """,
                (SessionStatus.LOCKED.value, *[int(s) for s in session_ids], SessionStatus.FINALIZED.value),
            )
            return int(cur.rowcount)

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM sessions")
            return int(fetchone(cur)["n"])
