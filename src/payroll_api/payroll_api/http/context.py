from __future__ import annotations

from functools import wraps
from typing import Any, Optional

from flask import current_app, g, request, session

from ..common.pagination import PageRequest
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..security.auth_gate import UNAUTHENTICATED, AuthChannel, AuthGate, GateRequest, Identity


def gate_request() -> GateRequest:
    """Snapshot of the current Flask request for the security gates."""
    return GateRequest(
        method=request.method,
        headers=request.headers,
        session=session,
        form=request.form,
        json_body=request.get_json(silent=True),
    )


def current_channel() -> AuthChannel:
    return g.get("auth_channel", UNAUTHENTICATED)


def current_identity() -> Optional[Identity]:
    return current_channel().identity


def role_required(*roles: Role):
    """View decorator; the gate pipeline has already authenticated the caller."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            identity = current_identity()
            if identity is None:
                raise AuthenticationError("Authentication required")
            if not AuthGate.role_matches(identity, roles):
                raise AuthorizationError("You do not have permission to access this resource")
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = role_required(Role.ADMIN)


def json_payload() -> dict[str, Any]:
    """Request body as a dict: JSON first, then form fields."""
    if request.is_json or (request.data and not request.form):
        body = request.get_json(silent=True)
        if body is None:
            if request.data:
                raise ValidationError("Invalid JSON data")
            return {}
        if not isinstance(body, dict):
            raise ValidationError("Invalid JSON data")
        return body
    return request.form.to_dict()


def page_request() -> PageRequest:
    settings = current_app.config["PAYROLL_SETTINGS"]
    return PageRequest.from_args(
        request.args,
        default_size=settings.default_page_size,
        max_size=settings.max_page_size,
    )


def query_arg(name: str) -> str:
    return (request.args.get(name) or "").strip()
