from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_paginated(self, *, search: str, limit: int, offset: int) -> Sequence[Employee]:
        raise NotImplementedError

    def count(self, *, search: str = "") -> int:
        raise NotImplementedError

    def last_id_with_prefix(self, prefix: str) -> Optional[str]:
        """Highest employee id starting with `prefix`, if any."""
        raise NotImplementedError

    def create_employee(
        self, *, employee_id: str, firstname: str, lastname: str, contact_number: str, email: str
    ) -> None:
        raise NotImplementedError

    def update_employee(
        self, employee_id: str, *, firstname: str, lastname: str, contact_number: str, email: str
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, employee_id: str) -> bool:
        raise NotImplementedError
