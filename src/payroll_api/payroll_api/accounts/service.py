from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.pagination import Page, PageRequest
from ..common.validators import InputValidator
from ..core.enums import AccountStatus, AccountType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import EmployeeAccount
from .repository import AccountRepository

_TYPES = [t.value for t in AccountType]
_STATUSES = [s.value for s in AccountStatus]


class AccountService:
    def __init__(self, accounts: AccountRepository, employees: EmployeeRepository):
        self._accounts = accounts
        self._employees = employees

    @staticmethod
    def account_types() -> list[str]:
        return list(_TYPES)

    @staticmethod
    def account_statuses() -> list[str]:
        return list(_STATUSES)

    def _require_employee(self, employee_id: str) -> None:
        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Employee not found", {"employee_id": "Employee not found"})

    def list_accounts(
        self, page: PageRequest, *, search: str = "", account_type: str = ""
    ) -> Page[EmployeeAccount]:
        type_filter: Optional[AccountType] = None
        if account_type:
            InputValidator({"type": account_type}).in_choices("type", _TYPES).validate()
            type_filter = AccountType(account_type)
        items = self._accounts.list_paginated(
            search=search, account_type=type_filter, limit=page.per_page, offset=page.offset
        )
        total = self._accounts.count(search=search, account_type=type_filter)
        return Page(items=items, total=total, request=page)

    def get_account(self, account_id: int) -> EmployeeAccount:
        account = self._accounts.get_by_id(account_id)
        if not account:
            raise NotFoundError("Account not found")
        return account

    def list_for_employee(self, employee_id: str) -> Sequence[EmployeeAccount]:
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")
        return self._accounts.list_for_employee(employee_id)

    def create_account(self, data: Mapping[str, Any]) -> EmployeeAccount:
        (
            InputValidator(data)
            .required(["employee_id", "account_email", "account_password", "account_type"])
            .email("account_email")
            .in_choices("account_type", _TYPES)
            .in_choices("account_status", _STATUSES)
            .validate()
        )
        employee_id = str(data["employee_id"]).strip()
        self._require_employee(employee_id)

        account_id = self._accounts.create_account(
            employee_id=employee_id,
            account_email=str(data["account_email"]).strip(),
            password_hash=generate_password_hash(str(data["account_password"])),
            account_type=AccountType(data["account_type"]),
            account_status=AccountStatus(data.get("account_status") or AccountStatus.ACTIVE.value),
        )
        return self.get_account(account_id)

    def update_account(self, account_id: int, data: Mapping[str, Any]) -> EmployeeAccount:
        self.get_account(account_id)
        (
            InputValidator(data)
            .required(["employee_id", "account_email", "account_type", "account_status"])
            .email("account_email")
            .in_choices("account_type", _TYPES)
            .in_choices("account_status", _STATUSES)
            .validate()
        )
        employee_id = str(data["employee_id"]).strip()
        self._require_employee(employee_id)

        password = data.get("account_password")
        self._accounts.update_account(
            account_id,
            employee_id=employee_id,
            account_email=str(data["account_email"]).strip(),
            account_type=AccountType(data["account_type"]),
            account_status=AccountStatus(data["account_status"]),
            password_hash=generate_password_hash(str(password)) if password else None,
        )
        return self.get_account(account_id)

    def delete_account(self, account_id: int) -> None:
        self.get_account(account_id)
        if not self._accounts.delete_by_id(account_id):
            raise ValidationError("Failed to delete account")
