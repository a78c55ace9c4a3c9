from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AccountStatus, AccountType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, search_condition
from .model import EmployeeAccount
from .repository import AccountRepository

_SELECT = """
    SELECT a.account_id, a.employee_id, a.account_email, a.account_password, a.account_type,
           a.account_status, a.created_at, a.updated_at, e.firstname, e.lastname
    FROM employee_accounts a
    LEFT JOIN employees e ON a.employee_id = e.employee_id
"""
_SEARCH_COLUMNS = ("a.account_id", "a.account_email", "a.employee_id", "e.firstname", "e.lastname")


def _row_to_account(row: dict) -> EmployeeAccount:
    name = None
    if row.get("firstname") is not None:
        name = f"{row['firstname']} {row.get('lastname') or ''}".strip()
    return EmployeeAccount(
        account_id=int(row["account_id"]),
        employee_id=str(row["employee_id"]),
        account_email=row["account_email"],
        account_type=AccountType(row["account_type"]),
        account_status=AccountStatus(row.get("account_status") or AccountStatus.ACTIVE.value),
        password_hash=row.get("account_password") or "",
        employee_name=name,
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def _filters(search: str, account_type: Optional[AccountType]) -> list:
    conditions = []
    if search:
        conditions.append(search_condition(search, _SEARCH_COLUMNS))
    if account_type is not None:
        conditions.append(("a.account_type = %s", [account_type.value]))
    return conditions


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, account_id: int) -> Optional[EmployeeAccount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE a.account_id=%s", (account_id,))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def list_paginated(
        self, *, search: str, account_type: Optional[AccountType], limit: int, offset: int
    ) -> Sequence[EmployeeAccount]:
        where, params = build_where(_filters(search, account_type))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} {where} ORDER BY a.account_id ASC LIMIT %s OFFSET %s",
                (*params, int(limit), int(offset)),
            )
            return [_row_to_account(r) for r in fetchall(cur)]

    def count(self, *, search: str = "", account_type: Optional[AccountType] = None) -> int:
        where, params = build_where(_filters(search, account_type))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM employee_accounts a "
                f"LEFT JOIN employees e ON a.employee_id = e.employee_id {where}",
                tuple(params),
            )
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def list_for_employee(self, employee_id: str) -> Sequence[EmployeeAccount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE a.employee_id=%s ORDER BY a.account_id ASC", (employee_id,))
            return [_row_to_account(r) for r in fetchall(cur)]

    def create_account(
        self,
        *,
        employee_id: str,
        account_email: str,
        password_hash: str,
        account_type: AccountType,
        account_status: AccountStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_accounts(employee_id, account_email, account_password, account_type, account_status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (employee_id, account_email, password_hash, account_type.value, account_status.value),
            )
            return int(cur.lastrowid)

    def update_account(
        self,
        account_id: int,
        *,
        employee_id: str,
        account_email: str,
        account_type: AccountType,
        account_status: AccountStatus,
        password_hash: Optional[str] = None,
    ) -> bool:
        sets = ["employee_id=%s", "account_email=%s", "account_type=%s", "account_status=%s"]
        params: list = [employee_id, account_email, account_type.value, account_status.value]
        if password_hash:
            sets.append("account_password=%s")
            params.append(password_hash)
        params.append(account_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE employee_accounts SET {', '.join(sets)} WHERE account_id=%s", tuple(params))
            return True

    def delete_by_id(self, account_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employee_accounts WHERE account_id=%s", (account_id,))
            return cur.rowcount > 0
