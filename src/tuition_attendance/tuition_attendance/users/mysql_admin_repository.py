from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Admin
from .repository import AdminRepository


class MySQLAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Admin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT admin_id, email, name, password_hash FROM admins WHERE email=%s",
                (email,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Admin(
                admin_id=int(r["admin_id"]),
                email=r["email"],
                name=r["name"],
                password_hash=r["password_hash"],
            )

    def create(self, *, email: str, name: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO admins(email, name, password_hash) VALUES(%s,%s,%s)",
                (email, name, password_hash),
            )
            return int(cur.lastrowid)

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM admins")
            return int(fetchone(cur)["n"])
