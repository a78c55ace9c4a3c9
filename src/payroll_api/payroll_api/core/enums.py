from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access control."""

    ADMIN = "admin"
    USER = "user"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class PaymentStatus(str, Enum):
    """Payslip payment states."""

    PAID = "Paid"
    PENDING = "Pending"
    CANCELLED = "Cancelled"


class AccountType(str, Enum):
    TEAM_LEADER = "Team Leader"
    OVERFLOW = "Overflow"
    AUTO_WARRANTY = "Auto-Warranty"
    COMMISSIONS = "Commissions"


class AccountStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


class ChannelKind(str, Enum):
    """Which credential channel authenticated a request."""

    SESSION = "session"
    BEARER = "bearer"
    NONE = "none"
