from __future__ import annotations

from typing import Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400

    def __init__(self, message: str, errors: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.errors = dict(errors or {})


class AuthenticationError(DomainError):
    """Raised when no credential channel authenticates the caller, or login fails."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action (wrong role, CSRF failure)."""

    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class TokenError(Exception):
    """Base class for bearer token failures. Never surfaced to clients."""


class TokenEncodingError(TokenError):
    """Claims could not be serialized."""


class MalformedTokenError(TokenError):
    """Token is structurally invalid."""


class UnsupportedAlgorithmError(MalformedTokenError):
    """Header declares an algorithm other than HS256."""


class BadSignatureError(TokenError):
    """HMAC does not match."""


class TokenExpiredError(TokenError):
    """Claim `exp` is in the past."""
