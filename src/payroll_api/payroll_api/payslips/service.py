from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..banking.repository import BankingRepository
from ..common.datetime_utils import parse_iso_date
from ..common.pagination import Page, PageRequest
from ..common.validators import InputValidator
from ..core.constants import PAYSLIP_NO_LENGTH
from ..core.enums import PaymentStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging import get_logger
from ..employees.repository import EmployeeRepository
from .model import Payslip, PayslipFilter
from .repository import PayslipRepository

log = get_logger(__name__)

_PAYSLIP_NO_RE = re.compile(rf"^\d{{{PAYSLIP_NO_LENGTH}}}$")
_STATUSES = [s.value for s in PaymentStatus]
_REQUIRED = [
    "employee_id",
    "bank_account_id",
    "salary",
    "bonus",
    "person_in_charge",
    "cutoff_date",
    "payment_date",
    "payment_status",
]


class PayslipRenderer(Protocol):
    def render_agent(self, record: Mapping[str, Any]) -> dict:
        ...

    def render_admin(self, record: Mapping[str, Any]) -> dict:
        ...

    def remove(self, public_path: Optional[str]) -> bool:
        ...


# DECIMAL(12, 2) columns
_MAX_AMOUNT = Decimal("9999999999.99")


def _decimal(value: Any, field: str) -> Decimal:
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        amount = None
    if amount is None or not amount.is_finite():
        raise ValidationError("Invalid input data", {field: f"{field.capitalize()} must be a number"})
    if abs(amount) > _MAX_AMOUNT:
        raise ValidationError("Invalid input data", {field: f"{field.capitalize()} is too large"})
    return amount.quantize(Decimal("0.01"))


class PayslipService:
    """Use case: issue payslips and keep their PDF copies in step with the record."""

    def __init__(
        self,
        payslips: PayslipRepository,
        employees: EmployeeRepository,
        banking: BankingRepository,
        renderer: PayslipRenderer,
    ):
        self._payslips = payslips
        self._employees = employees
        self._banking = banking
        self._renderer = renderer

    @staticmethod
    def payment_statuses() -> list[str]:
        return list(_STATUSES)

    def generate_payslip_no(self) -> str:
        last = self._payslips.last_payslip_no()
        seq = int(last) + 1 if last and last.isdigit() else 1
        return f"{seq:0{PAYSLIP_NO_LENGTH}d}"

    def list_payslips(
        self,
        page: PageRequest,
        *,
        search: str = "",
        status: str = "",
        start_date: str = "",
        end_date: str = "",
    ) -> Page[Payslip]:
        (
            InputValidator({"status": status, "start_date": start_date, "end_date": end_date})
            .in_choices("status", _STATUSES)
            .date("start_date")
            .date("end_date")
            .validate()
        )
        flt = PayslipFilter(
            search=search,
            status=PaymentStatus(status) if status else None,
            start_date=parse_iso_date(start_date) if start_date else None,
            end_date=parse_iso_date(end_date) if end_date else None,
        )
        items = self._payslips.list_paginated(flt, limit=page.per_page, offset=page.offset)
        return Page(items=items, total=self._payslips.count(flt), request=page)

    def get_payslip(self, key: Any) -> Payslip:
        """Look up by numeric id, or by payslip number when given all nine digits."""
        raw = str(key).strip()
        payslip = None
        if _PAYSLIP_NO_RE.match(raw):
            payslip = self._payslips.get_by_no(raw)
        elif raw.isdigit():
            payslip = self._payslips.get_by_id(int(raw))
        if not payslip:
            raise NotFoundError("Payslip not found")
        return payslip

    def _require(self, payslip_id: int) -> Payslip:
        payslip = self._payslips.get_by_id(int(payslip_id))
        if not payslip:
            raise NotFoundError("Payslip not found")
        return payslip

    def list_for_employee(self, employee_id: str) -> Sequence[Payslip]:
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")
        return self._payslips.list_for_employee(employee_id)

    def _clean(self, data: Mapping[str, Any]) -> dict:
        (
            InputValidator(data)
            .required(_REQUIRED)
            .numeric("salary")
            .numeric("bonus")
            .integer("bank_account_id")
            .date("cutoff_date")
            .date("payment_date")
            .in_choices("payment_status", _STATUSES)
            .validate()
        )
        employee_id = str(data["employee_id"]).strip()
        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Employee not found", {"employee_id": "Employee not found"})

        bank_account_id = int(str(data["bank_account_id"]).strip())
        bank = self._banking.get_by_id(bank_account_id)
        if not bank or bank.employee_id != employee_id:
            raise ValidationError(
                "Banking detail not found for this employee",
                {"bank_account_id": "Banking detail not found for this employee"},
            )

        salary = _decimal(data["salary"], "salary")
        bonus = _decimal(data["bonus"], "bonus")
        if abs(salary + bonus) > _MAX_AMOUNT:
            raise ValidationError("Invalid input data", {"total_salary": "Total salary is too large"})
        return {
            "employee_id": employee_id,
            "bank_account_id": bank_account_id,
            "salary": salary,
            "bonus": bonus,
            "total_salary": salary + bonus,
            "person_in_charge": str(data["person_in_charge"]).strip(),
            "cutoff_date": parse_iso_date(str(data["cutoff_date"])),
            "payment_date": parse_iso_date(str(data["payment_date"])),
            "payment_status": PaymentStatus(data["payment_status"]),
        }

    def _render(self, payslip: Payslip) -> Payslip:
        record = payslip.to_dict()
        agent = self._renderer.render_agent(record)
        admin = self._renderer.render_admin(record)
        self._payslips.update_pdf_paths(payslip.id, agent_pdf_path=agent["path"], admin_pdf_path=admin["path"])
        for old, new in ((payslip.agent_pdf_path, agent["path"]), (payslip.admin_pdf_path, admin["path"])):
            if old and old != new:
                self._renderer.remove(old)
        return self._require(payslip.id)

    def create_payslip(self, data: Mapping[str, Any]) -> Payslip:
        fields = self._clean(data)
        payslip_no = self.generate_payslip_no()
        payslip_id = self._payslips.create_payslip(payslip_no=payslip_no, **fields)
        log.info("payslip_created", payslip_no=payslip_no, employee_id=fields["employee_id"])
        return self._render(self._require(payslip_id))

    def update_payslip(self, payslip_id: int, data: Mapping[str, Any]) -> Payslip:
        self._require(payslip_id)
        self._payslips.update_payslip(int(payslip_id), **self._clean(data))
        return self._render(self._require(payslip_id))

    def regenerate_pdfs(self, payslip_id: int) -> dict:
        payslip = self._render(self._require(payslip_id))
        return {"agent_pdf_path": payslip.agent_pdf_path, "admin_pdf_path": payslip.admin_pdf_path}

    def delete_payslip(self, payslip_id: int) -> None:
        payslip = self._require(payslip_id)
        self._renderer.remove(payslip.agent_pdf_path)
        self._renderer.remove(payslip.admin_pdf_path)
        if not self._payslips.delete_by_id(payslip.id):
            raise ValidationError("Failed to delete payslip")
