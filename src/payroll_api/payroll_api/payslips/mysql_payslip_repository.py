from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PaymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, search_condition
from .model import Payslip, PayslipFilter
from .repository import PayslipRepository

_FROM = """
    FROM payslips p
    LEFT JOIN employees e ON p.employee_id = e.employee_id
    LEFT JOIN employee_banking_details b ON p.bank_account_id = b.id
"""
_SELECT = (
    """
    SELECT p.id, p.payslip_no, p.employee_id, p.bank_account_id, p.salary, p.bonus,
           p.total_salary, p.person_in_charge, p.cutoff_date, p.payment_date,
           p.payment_status, p.agent_pdf_path, p.admin_pdf_path, p.created_at, p.updated_at,
           e.firstname, e.lastname,
           b.preferred_bank, b.bank_account_number, b.bank_account_name
    """
    + _FROM
)
_ORDER = "ORDER BY p.payment_date DESC, p.id DESC"
_SEARCH_COLUMNS = ("p.payslip_no", "p.employee_id", "e.firstname", "e.lastname", "p.person_in_charge")


def _row_to_payslip(row: dict) -> Payslip:
    name = None
    if row.get("firstname") is not None:
        name = f"{row['firstname']} {row.get('lastname') or ''}".strip()
    return Payslip(
        id=int(row["id"]),
        payslip_no=str(row["payslip_no"]),
        employee_id=str(row["employee_id"]),
        bank_account_id=int(row["bank_account_id"]),
        salary=Decimal(str(row["salary"])),
        bonus=Decimal(str(row["bonus"])),
        total_salary=Decimal(str(row["total_salary"])),
        person_in_charge=row["person_in_charge"],
        cutoff_date=row["cutoff_date"],
        payment_date=row["payment_date"],
        payment_status=PaymentStatus(row["payment_status"]),
        agent_pdf_path=row.get("agent_pdf_path"),
        admin_pdf_path=row.get("admin_pdf_path"),
        employee_name=name,
        preferred_bank=row.get("preferred_bank"),
        bank_account_number=row.get("bank_account_number"),
        bank_account_name=row.get("bank_account_name"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def _conditions(flt: PayslipFilter) -> list:
    conditions = []
    if flt.search:
        conditions.append(search_condition(flt.search, _SEARCH_COLUMNS))
    if flt.status is not None:
        conditions.append(("p.payment_status = %s", [flt.status.value]))
    if flt.start_date is not None:
        conditions.append(("p.payment_date >= %s", [flt.start_date]))
    if flt.end_date is not None:
        conditions.append(("p.payment_date <= %s", [flt.end_date]))
    return conditions


class MySQLPayslipRepository(PayslipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value) -> Optional[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE p.{column}=%s LIMIT 1", (value,))
            row = fetchone(cur)
            return _row_to_payslip(row) if row else None

    def get_by_id(self, payslip_id: int) -> Optional[Payslip]:
        return self._get_one("id", int(payslip_id))

    def get_by_no(self, payslip_no: str) -> Optional[Payslip]:
        return self._get_one("payslip_no", payslip_no)

    def list_paginated(self, flt: PayslipFilter, *, limit: int, offset: int) -> Sequence[Payslip]:
        where, params = build_where(_conditions(flt))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} {_ORDER} LIMIT %s OFFSET %s", (*params, int(limit), int(offset)))
            return [_row_to_payslip(r) for r in fetchall(cur)]

    def count(self, flt: PayslipFilter) -> int:
        where, params = build_where(_conditions(flt))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total {_FROM} {where}", tuple(params))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def list_for_employee(self, employee_id: str) -> Sequence[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE p.employee_id=%s {_ORDER}", (employee_id,))
            return [_row_to_payslip(r) for r in fetchall(cur)]

    def last_payslip_no(self) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payslip_no FROM payslips ORDER BY id DESC LIMIT 1")
            row = fetchone(cur)
            return str(row["payslip_no"]) if row else None

    def create_payslip(
        self,
        *,
        payslip_no: str,
        employee_id: str,
        bank_account_id: int,
        salary: Decimal,
        bonus: Decimal,
        total_salary: Decimal,
        person_in_charge: str,
        cutoff_date: date,
        payment_date: date,
        payment_status: PaymentStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payslips(
                    payslip_no, employee_id, bank_account_id, salary, bonus, total_salary,
                    person_in_charge, cutoff_date, payment_date, payment_status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    payslip_no,
                    employee_id,
                    int(bank_account_id),
                    salary,
                    bonus,
                    total_salary,
                    person_in_charge,
                    cutoff_date,
                    payment_date,
                    payment_status.value,
                ),
            )
            return int(cur.lastrowid)

    def update_payslip(
        self,
        payslip_id: int,
        *,
        employee_id: str,
        bank_account_id: int,
        salary: Decimal,
        bonus: Decimal,
        total_salary: Decimal,
        person_in_charge: str,
        cutoff_date: date,
        payment_date: date,
        payment_status: PaymentStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payslips
                SET employee_id=%s, bank_account_id=%s, salary=%s, bonus=%s, total_salary=%s,
                    person_in_charge=%s, cutoff_date=%s, payment_date=%s, payment_status=%s
                WHERE id=%s
                """,
                (
                    employee_id,
                    int(bank_account_id),
                    salary,
                    bonus,
                    total_salary,
                    person_in_charge,
                    cutoff_date,
                    payment_date,
                    payment_status.value,
                    int(payslip_id),
                ),
            )
            return True

    def update_pdf_paths(self, payslip_id: int, *, agent_pdf_path: str, admin_pdf_path: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payslips SET agent_pdf_path=%s, admin_pdf_path=%s WHERE id=%s",
                (agent_pdf_path, admin_pdf_path, int(payslip_id)),
            )
            return True

    def delete_by_id(self, payslip_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payslips WHERE id=%s", (int(payslip_id),))
            return cur.rowcount > 0
