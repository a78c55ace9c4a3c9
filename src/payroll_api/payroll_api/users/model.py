from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role, UserStatus
from ..database.mysql_base import as_iso


@dataclass(frozen=True)
class User:
    """Domain entity: API user (a payroll operator, not an employee).

    Plain data object; no DB access here.
    """

    id: int
    firstname: str
    lastname: str
    username: str
    password_hash: str
    email: Optional[str]
    role: Role
    status: UserStatus = UserStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def to_public(self) -> dict:
        """Serializable view; never includes the password hash."""
        return {
            "id": self.id,
            "firstname": self.firstname,
            "lastname": self.lastname,
            "username": self.username,
            "email": self.email,
            "role": self.role.value,
            "status": self.status.value,
            "created_at": as_iso(self.created_at),
            "updated_at": as_iso(self.updated_at),
        }
