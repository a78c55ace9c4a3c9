from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..database.mysql_base import as_iso


@dataclass(frozen=True)
class Employee:
    """Domain entity: a paid agent. Identified by a `YYYYNNNNN` employee id."""

    employee_id: str
    firstname: str
    lastname: str
    contact_number: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}".strip()

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "firstname": self.firstname,
            "lastname": self.lastname,
            "contact_number": self.contact_number,
            "email": self.email,
            "created_at": as_iso(self.created_at),
            "updated_at": as_iso(self.updated_at),
        }
