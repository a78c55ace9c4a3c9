from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role, UserStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, search_condition
from .model import User
from .repository import UserRepository

_COLUMNS = "id, firstname, lastname, username, password, email, role, status, created_at, updated_at"
_SEARCH_COLUMNS = ("firstname", "lastname", "username", "email")


def _row_to_user(row: dict) -> User:
    return User(
        id=int(row["id"]),
        firstname=row["firstname"],
        lastname=row["lastname"],
        username=row["username"],
        password_hash=row["password"],
        email=row.get("email"),
        role=Role(row["role"]),
        status=UserStatus(row.get("status") or UserStatus.ACTIVE.value),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def list_paginated(self, *, search: str, limit: int, offset: int) -> Sequence[User]:
        where, params = build_where([search_condition(search, _SEARCH_COLUMNS)] if search else [])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users {where} ORDER BY id ASC LIMIT %s OFFSET %s",
                (*params, int(limit), int(offset)),
            )
            return [_row_to_user(r) for r in fetchall(cur)]

    def count(self, *, search: str = "") -> int:
        where, params = build_where([search_condition(search, _SEARCH_COLUMNS)] if search else [])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM users {where}", tuple(params))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def count_by_role(self, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM users WHERE role=%s", (role.value,))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def create_user(
        self,
        *,
        firstname: str,
        lastname: str,
        username: str,
        password_hash: str,
        email: Optional[str],
        role: Role,
        status: UserStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(firstname, lastname, username, password, email, role, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (firstname, lastname, username, password_hash, email, role.value, status.value),
            )
            return int(cur.lastrowid)

    def update_user(
        self,
        user_id: int,
        *,
        firstname: str,
        lastname: str,
        username: str,
        email: Optional[str],
        role: Role,
        status: UserStatus,
        password_hash: Optional[str] = None,
    ) -> bool:
        sets = ["firstname=%s", "lastname=%s", "username=%s", "email=%s", "role=%s", "status=%s"]
        params: list = [firstname, lastname, username, email, role.value, status.value]
        if password_hash:
            sets.append("password=%s")
            params.append(password_hash)
        params.append(user_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE users SET {', '.join(sets)} WHERE id=%s", tuple(params))
            # rowcount is 0 when the values are unchanged
            return True

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (user_id,))
            return cur.rowcount > 0
