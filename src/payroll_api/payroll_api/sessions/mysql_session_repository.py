from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import SessionRepository


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def open_session(self, session_id: str, *, now: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO api_sessions(session_id, last_seen) VALUES(%s,%s)",
                (session_id, int(now)),
            )

    def last_seen(self, session_id: str) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT last_seen FROM api_sessions WHERE session_id=%s", (session_id,))
            row = fetchone(cur)
            return int(row["last_seen"]) if row else None

    def touch(self, session_id: str, *, now: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            # never move backwards when requests overlap
            cur.execute(
                "UPDATE api_sessions SET last_seen=GREATEST(last_seen, %s) WHERE session_id=%s",
                (int(now), session_id),
            )

    def revoke(self, session_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM api_sessions WHERE session_id=%s", (session_id,))

    def purge_idle(self, *, older_than: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM api_sessions WHERE last_seen < %s", (int(older_than),))
            return cur.rowcount
