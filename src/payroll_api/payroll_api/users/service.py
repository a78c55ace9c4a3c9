from __future__ import annotations

from typing import Any, Mapping

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.pagination import Page, PageRequest
from ..common.validators import InputValidator
from ..core.constants import INITIAL_ADMIN_PASSWORD, INITIAL_ADMIN_USERNAME
from ..core.enums import Role, UserStatus
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..core.logging import get_logger
from .model import User
from .repository import UserRepository

log = get_logger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def ensure_initial_admin(self) -> bool:
        """Create the first admin account when the users table is empty."""
        if self._users.count() > 0:
            return False
        self._users.create_user(
            firstname="Admin",
            lastname="User",
            username=INITIAL_ADMIN_USERNAME,
            password_hash=generate_password_hash(INITIAL_ADMIN_PASSWORD),
            email="admin@example.com",
            role=Role.ADMIN,
            status=UserStatus.ACTIVE,
        )
        log.warning("initial_admin_created", username=INITIAL_ADMIN_USERNAME)
        return True

    def authenticate(self, username: str, password: str) -> User:
        user = self._users.get_by_username(username)
        if not user:
            raise AuthenticationError("Invalid username or password")
        if not user.is_active:
            raise AuthenticationError("Your account is not active")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")
        return user


class UserService:
    """Use case: manage API users."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self, page: PageRequest, *, search: str = "") -> Page[User]:
        items = self._users.list_paginated(search=search, limit=page.per_page, offset=page.offset)
        return Page(items=items, total=self._users.count(search=search), request=page)

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def _validate(self, data: Mapping[str, Any], *, creating: bool) -> None:
        v = InputValidator(data)
        v.required(["firstname", "lastname", "username"] + (["password"] if creating else []))
        v.min_length("username", 3).email("email")
        if creating or data.get("password"):
            v.min_length("password", 6)
        v.in_choices("role", [r.value for r in Role])
        v.in_choices("status", [s.value for s in UserStatus])
        v.validate()

    def create_user(self, data: Mapping[str, Any], *, force_role: Role | None = None) -> User:
        """Create a user. `force_role` pins the role (public registration)."""
        self._validate(data, creating=True)

        username = str(data["username"]).strip()
        if self._users.get_by_username(username):
            raise ValidationError("Username already exists", {"username": "Username already exists"})

        role = force_role or Role(data.get("role") or Role.USER.value)
        user_id = self._users.create_user(
            firstname=str(data["firstname"]).strip(),
            lastname=str(data["lastname"]).strip(),
            username=username,
            password_hash=generate_password_hash(str(data["password"])),
            email=data.get("email") or None,
            role=role,
            status=UserStatus(data.get("status") or UserStatus.ACTIVE.value),
        )
        return self.get_user(user_id)

    def update_user(self, user_id: int, data: Mapping[str, Any]) -> User:
        existing = self.get_user(user_id)
        self._validate(data, creating=False)

        username = str(data["username"]).strip()
        other = self._users.get_by_username(username)
        if other and other.id != existing.id:
            raise ValidationError("Username already exists", {"username": "Username already exists"})

        role = Role(data["role"]) if data.get("role") else existing.role
        status = UserStatus(data["status"]) if data.get("status") else existing.status
        if existing.role == Role.ADMIN and role != Role.ADMIN and self._users.count_by_role(Role.ADMIN) <= 1:
            raise ValidationError("Cannot remove the only admin user", {"role": "Cannot remove the only admin user"})

        password = data.get("password")
        self._users.update_user(
            user_id,
            firstname=str(data["firstname"]).strip(),
            lastname=str(data["lastname"]).strip(),
            username=username,
            email=data.get("email") or None,
            role=role,
            status=status,
            password_hash=generate_password_hash(str(password)) if password else None,
        )
        return self.get_user(user_id)

    def delete_user(self, user_id: int) -> None:
        user = self.get_user(user_id)
        if user.role == Role.ADMIN and self._users.count_by_role(Role.ADMIN) <= 1:
            raise ValidationError("Cannot delete the only admin user")
        if not self._users.delete_by_id(user_id):
            raise ValidationError("Failed to delete user")
