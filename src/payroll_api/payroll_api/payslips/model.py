from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentStatus
from ..database.mysql_base import as_float, as_iso


@dataclass(frozen=True)
class Payslip:
    """Domain entity: one payment to an employee for a cutoff period.

    `employee_name` and the bank fields are filled from joins when read back.
    """

    id: int
    payslip_no: str
    employee_id: str
    bank_account_id: int
    salary: Decimal
    bonus: Decimal
    total_salary: Decimal
    person_in_charge: str
    cutoff_date: date
    payment_date: date
    payment_status: PaymentStatus
    agent_pdf_path: Optional[str] = None
    admin_pdf_path: Optional[str] = None
    employee_name: Optional[str] = None
    preferred_bank: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_account_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def bank_details(self) -> dict:
        return {
            "preferred_bank": self.preferred_bank,
            "bank_account_number": self.bank_account_number,
            "bank_account_name": self.bank_account_name,
        }

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "payslip_no": self.payslip_no,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "bank_account_id": self.bank_account_id,
            "bank_details": self.bank_details,
            "salary": as_float(self.salary),
            "bonus": as_float(self.bonus),
            "total_salary": as_float(self.total_salary),
            "person_in_charge": self.person_in_charge,
            "cutoff_date": as_iso(self.cutoff_date),
            "payment_date": as_iso(self.payment_date),
            "payment_status": self.payment_status.value,
            "agent_pdf_path": self.agent_pdf_path,
            "admin_pdf_path": self.admin_pdf_path,
            "created_at": as_iso(self.created_at),
            "updated_at": as_iso(self.updated_at),
        }


@dataclass(frozen=True)
class PayslipFilter:
    search: str = ""
    status: Optional[PaymentStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
