from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, search_condition
from .model import BankingDetail
from .repository import BankingRepository

_SELECT = """
    SELECT b.id, b.employee_id, b.preferred_bank, b.bank_account_number, b.bank_account_name,
           b.created_at, b.updated_at, e.firstname, e.lastname
    FROM employee_banking_details b
    LEFT JOIN employees e ON b.employee_id = e.employee_id
"""
_SEARCH_COLUMNS = (
    "b.id",
    "b.employee_id",
    "b.preferred_bank",
    "b.bank_account_number",
    "b.bank_account_name",
    "e.firstname",
    "e.lastname",
)


def _row_to_detail(row: dict) -> BankingDetail:
    name = None
    if row.get("firstname") is not None:
        name = f"{row['firstname']} {row.get('lastname') or ''}".strip()
    return BankingDetail(
        id=int(row["id"]),
        employee_id=str(row["employee_id"]),
        preferred_bank=row["preferred_bank"],
        bank_account_number=row["bank_account_number"],
        bank_account_name=row["bank_account_name"],
        employee_name=name,
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLBankingRepository(BankingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, banking_id: int) -> Optional[BankingDetail]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE b.id=%s", (banking_id,))
            row = fetchone(cur)
            return _row_to_detail(row) if row else None

    def list_paginated(self, *, search: str, limit: int, offset: int) -> Sequence[BankingDetail]:
        where, params = build_where([search_condition(search, _SEARCH_COLUMNS)] if search else [])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} {where} ORDER BY b.id ASC LIMIT %s OFFSET %s",
                (*params, int(limit), int(offset)),
            )
            return [_row_to_detail(r) for r in fetchall(cur)]

    def count(self, *, search: str = "") -> int:
        where, params = build_where([search_condition(search, _SEARCH_COLUMNS)] if search else [])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM employee_banking_details b "
                f"LEFT JOIN employees e ON b.employee_id = e.employee_id {where}",
                tuple(params),
            )
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def list_for_employee(self, employee_id: str) -> Sequence[BankingDetail]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE b.employee_id=%s ORDER BY b.id ASC", (employee_id,))
            return [_row_to_detail(r) for r in fetchall(cur)]

    def account_number_exists(
        self, employee_id: str, bank_account_number: str, *, exclude_id: Optional[int] = None
    ) -> bool:
        sql = "SELECT id FROM employee_banking_details WHERE employee_id=%s AND bank_account_number=%s"
        params: list = [employee_id, bank_account_number]
        if exclude_id is not None:
            sql += " AND id<>%s"
            params.append(int(exclude_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " LIMIT 1", tuple(params))
            return fetchone(cur) is not None

    def create_detail(
        self, *, employee_id: str, preferred_bank: str, bank_account_number: str, bank_account_name: str
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_banking_details(employee_id, preferred_bank, bank_account_number, bank_account_name)
                VALUES(%s,%s,%s,%s)
                """,
                (employee_id, preferred_bank, bank_account_number, bank_account_name),
            )
            return int(cur.lastrowid)

    def update_detail(
        self,
        banking_id: int,
        *,
        employee_id: str,
        preferred_bank: str,
        bank_account_number: str,
        bank_account_name: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employee_banking_details
                SET employee_id=%s, preferred_bank=%s, bank_account_number=%s, bank_account_name=%s
                WHERE id=%s
                """,
                (employee_id, preferred_bank, bank_account_number, bank_account_name, banking_id),
            )
            return True

    def delete_by_id(self, banking_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employee_banking_details WHERE id=%s", (banking_id,))
            return cur.rowcount > 0
