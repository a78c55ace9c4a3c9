from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role, UserStatus
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_paginated(self, *, search: str, limit: int, offset: int) -> Sequence[User]:
        raise NotImplementedError

    def count(self, *, search: str = "") -> int:
        raise NotImplementedError

    def count_by_role(self, role: Role) -> int:
        raise NotImplementedError

    def create_user(
        self,
        *,
        firstname: str,
        lastname: str,
        username: str,
        password_hash: str,
        email: Optional[str],
        role: Role,
        status: UserStatus,
    ) -> int:
        raise NotImplementedError

    def update_user(
        self,
        user_id: int,
        *,
        firstname: str,
        lastname: str,
        username: str,
        email: Optional[str],
        role: Role,
        status: UserStatus,
        password_hash: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError
