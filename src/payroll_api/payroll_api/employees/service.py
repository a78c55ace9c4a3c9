from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from ..accounts.repository import AccountRepository
from ..banking.repository import BankingRepository
from ..common.datetime_utils import now_local
from ..common.pagination import Page, PageRequest
from ..common.validators import InputValidator
from ..core.constants import EMPLOYEE_SEQ_LENGTH
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

_REQUIRED = ["firstname", "lastname", "contact_number", "email"]


class EmployeeService:
    def __init__(
        self,
        employees: EmployeeRepository,
        accounts: AccountRepository,
        banking: BankingRepository,
        *,
        today: Callable = now_local,
    ):
        self._employees = employees
        self._accounts = accounts
        self._banking = banking
        self._today = today

    def generate_employee_id(self) -> str:
        """Next id for the current year: `YYYY` followed by a zero-padded sequence."""
        year = str(self._today().year)
        last = self._employees.last_id_with_prefix(year)
        seq = 1
        if last:
            tail = last[-EMPLOYEE_SEQ_LENGTH:]
            seq = int(tail) + 1 if tail.isdigit() else 1
        return f"{year}{seq:0{EMPLOYEE_SEQ_LENGTH}d}"

    def list_employees(self, page: PageRequest, *, search: str = "") -> Page[Employee]:
        items = self._employees.list_paginated(search=search, limit=page.per_page, offset=page.offset)
        return Page(items=items, total=self._employees.count(search=search), request=page)

    def get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def get_with_details(self, employee_id: str) -> dict:
        data = self.get_employee(employee_id).to_dict()
        data["accounts"] = [a.to_dict() for a in self._accounts.list_for_employee(employee_id)]
        data["banking_details"] = [b.to_dict() for b in self._banking.list_for_employee(employee_id)]
        return data

    @staticmethod
    def _validate(data: Mapping[str, Any]) -> dict:
        InputValidator(data).required(_REQUIRED).email("email").validate()
        return {k: str(data[k]).strip() for k in _REQUIRED}

    def create_employee(self, data: Mapping[str, Any]) -> Employee:
        fields = self._validate(data)
        employee_id: Optional[str] = str(data.get("employee_id") or "").strip() or None
        if employee_id is None:
            employee_id = self.generate_employee_id()
        elif self._employees.get_by_id(employee_id):
            raise ValidationError("Employee ID already exists", {"employee_id": "Employee ID already exists"})

        self._employees.create_employee(employee_id=employee_id, **fields)
        return self.get_employee(employee_id)

    def update_employee(self, employee_id: str, data: Mapping[str, Any]) -> Employee:
        self.get_employee(employee_id)
        self._employees.update_employee(employee_id, **self._validate(data))
        return self.get_employee(employee_id)

    def delete_employee(self, employee_id: str) -> None:
        self.get_employee(employee_id)
        if not self._employees.delete_by_id(employee_id):
            raise ValidationError("Failed to delete employee")
