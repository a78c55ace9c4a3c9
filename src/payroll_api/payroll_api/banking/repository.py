from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import BankingDetail


class BankingRepository(Protocol):
    def get_by_id(self, banking_id: int) -> Optional[BankingDetail]:
        raise NotImplementedError

    def list_paginated(self, *, search: str, limit: int, offset: int) -> Sequence[BankingDetail]:
        raise NotImplementedError

    def count(self, *, search: str = "") -> int:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[BankingDetail]:
        raise NotImplementedError

    def account_number_exists(
        self, employee_id: str, bank_account_number: str, *, exclude_id: Optional[int] = None
    ) -> bool:
        raise NotImplementedError

    def create_detail(
        self, *, employee_id: str, preferred_bank: str, bank_account_number: str, bank_account_name: str
    ) -> int:
        raise NotImplementedError

    def update_detail(
        self,
        banking_id: int,
        *,
        employee_id: str,
        preferred_bank: str,
        bank_account_number: str,
        bank_account_name: str,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, banking_id: int) -> bool:
        raise NotImplementedError
