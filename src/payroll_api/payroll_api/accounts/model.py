from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AccountStatus, AccountType
from ..database.mysql_base import as_iso


@dataclass(frozen=True)
class EmployeeAccount:
    """A platform login held by an employee. The password is stored hashed."""

    account_id: int
    employee_id: str
    account_email: str
    account_type: AccountType
    account_status: AccountStatus
    password_hash: str = ""
    employee_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        data = {
            "account_id": self.account_id,
            "employee_id": self.employee_id,
            "account_email": self.account_email,
            "account_type": self.account_type.value,
            "account_status": self.account_status.value,
            "created_at": as_iso(self.created_at),
            "updated_at": as_iso(self.updated_at),
        }
        if self.employee_name is not None:
            data["employee_name"] = self.employee_name
        return data
