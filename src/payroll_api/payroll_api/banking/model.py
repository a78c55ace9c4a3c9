from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..database.mysql_base import as_iso


@dataclass(frozen=True)
class BankingDetail:
    id: int
    employee_id: str
    preferred_bank: str
    bank_account_number: str
    bank_account_name: str
    employee_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def summary(self) -> str:
        """One-line description used on payslips."""
        return f"{self.preferred_bank} - {self.bank_account_number} ({self.bank_account_name})"

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "employee_id": self.employee_id,
            "preferred_bank": self.preferred_bank,
            "bank_account_number": self.bank_account_number,
            "bank_account_name": self.bank_account_name,
            "created_at": as_iso(self.created_at),
            "updated_at": as_iso(self.updated_at),
        }
        if self.employee_name is not None:
            data["employee_name"] = self.employee_name
        return data
