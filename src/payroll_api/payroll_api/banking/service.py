from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..common.pagination import Page, PageRequest
from ..common.validators import InputValidator
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import BankingDetail
from .repository import BankingRepository

_REQUIRED = ["employee_id", "preferred_bank", "bank_account_number", "bank_account_name"]
_DUPLICATE = "Banking detail with this account number already exists for this employee"


class BankingService:
    def __init__(self, banking: BankingRepository, employees: EmployeeRepository):
        self._banking = banking
        self._employees = employees

    def list_details(self, page: PageRequest, *, search: str = "") -> Page[BankingDetail]:
        items = self._banking.list_paginated(search=search, limit=page.per_page, offset=page.offset)
        return Page(items=items, total=self._banking.count(search=search), request=page)

    def get_detail(self, banking_id: int) -> BankingDetail:
        detail = self._banking.get_by_id(banking_id)
        if not detail:
            raise NotFoundError("Banking detail not found")
        return detail

    def list_for_employee(self, employee_id: str) -> Sequence[BankingDetail]:
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")
        return self._banking.list_for_employee(employee_id)

    def _clean(self, data: Mapping[str, Any], *, exclude_id: Optional[int] = None) -> dict:
        InputValidator(data).required(_REQUIRED).validate()
        cleaned = {k: str(data[k]).strip() for k in _REQUIRED}
        if not self._employees.get_by_id(cleaned["employee_id"]):
            raise ValidationError("Employee not found", {"employee_id": "Employee not found"})
        if self._banking.account_number_exists(
            cleaned["employee_id"], cleaned["bank_account_number"], exclude_id=exclude_id
        ):
            raise ValidationError(_DUPLICATE, {"bank_account_number": _DUPLICATE})
        return cleaned

    def create_detail(self, data: Mapping[str, Any]) -> BankingDetail:
        banking_id = self._banking.create_detail(**self._clean(data))
        return self.get_detail(banking_id)

    def update_detail(self, banking_id: int, data: Mapping[str, Any]) -> BankingDetail:
        self.get_detail(banking_id)
        self._banking.update_detail(banking_id, **self._clean(data, exclude_id=banking_id))
        return self.get_detail(banking_id)

    def delete_detail(self, banking_id: int) -> None:
        self.get_detail(banking_id)
        if not self._banking.delete_by_id(banking_id):
            raise ValidationError("Failed to delete banking detail")
