from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentStatus
from .model import Payslip, PayslipFilter


class PayslipRepository(Protocol):
    def get_by_id(self, payslip_id: int) -> Optional[Payslip]:
        raise NotImplementedError

    def get_by_no(self, payslip_no: str) -> Optional[Payslip]:
        raise NotImplementedError

    def list_paginated(self, flt: PayslipFilter, *, limit: int, offset: int) -> Sequence[Payslip]:
        raise NotImplementedError

    def count(self, flt: PayslipFilter) -> int:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[Payslip]:
        raise NotImplementedError

    def last_payslip_no(self) -> Optional[str]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

    def update_pdf_paths(self, payslip_id: int, *, agent_pdf_path: str, admin_pdf_path: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, payslip_id: int) -> bool:
        raise NotImplementedError
