from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, search_condition
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, firstname, lastname, contact_number, email, created_at, updated_at"
_SEARCH_COLUMNS = ("employee_id", "firstname", "lastname", "email", "contact_number")


def _row_to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=str(row["employee_id"]),
        firstname=row["firstname"],
        lastname=row["lastname"],
        contact_number=row["contact_number"],
        email=row["email"],
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def list_paginated(self, *, search: str, limit: int, offset: int) -> Sequence[Employee]:
        where, params = build_where([search_condition(search, _SEARCH_COLUMNS)] if search else [])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees {where} ORDER BY employee_id ASC LIMIT %s OFFSET %s",
                (*params, int(limit), int(offset)),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def count(self, *, search: str = "") -> int:
        where, params = build_where([search_condition(search, _SEARCH_COLUMNS)] if search else [])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM employees {where}", tuple(params))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def last_id_with_prefix(self, prefix: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT employee_id FROM employees WHERE employee_id LIKE %s ORDER BY employee_id DESC LIMIT 1",
                (f"{prefix}%",),
            )
            row = fetchone(cur)
            return str(row["employee_id"]) if row else None

    def create_employee(
        self, *, employee_id: str, firstname: str, lastname: str, contact_number: str, email: str
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(employee_id, firstname, lastname, contact_number, email)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (employee_id, firstname, lastname, contact_number, email),
            )

    def update_employee(
        self, employee_id: str, *, firstname: str, lastname: str, contact_number: str, email: str
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET firstname=%s, lastname=%s, contact_number=%s, email=%s
                WHERE employee_id=%s
                """,
                (firstname, lastname, contact_number, email, employee_id),
            )
            return True

    def delete_by_id(self, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (employee_id,))
            return cur.rowcount > 0
