from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AccountStatus, AccountType
from .model import EmployeeAccount


class AccountRepository(Protocol):
    def get_by_id(self, account_id: int) -> Optional[EmployeeAccount]:
        raise NotImplementedError

    def list_paginated(
        self, *, search: str, account_type: Optional[AccountType], limit: int, offset: int
    ) -> Sequence[EmployeeAccount]:
        raise NotImplementedError

    def count(self, *, search: str = "", account_type: Optional[AccountType] = None) -> int:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[EmployeeAccount]:
        raise NotImplementedError

    def create_account(
        self,
        *,
        employee_id: str,
        account_email: str,
        password_hash: str,
        account_type: AccountType,
        account_status: AccountStatus,
    ) -> int:
        raise NotImplementedError

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
        raise NotImplementedError

    def delete_by_id(self, account_id: int) -> bool:
        raise NotImplementedError
