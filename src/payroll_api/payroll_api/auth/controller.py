from __future__ import annotations

from flask import Flask, session

from ..common.validators import InputValidator
from ..container import Container
from ..core.enums import ChannelKind
from ..core.exceptions import AuthenticationError
from ..core.logging import get_logger
from ..http.context import gate_request, json_payload
from ..http.responses import success

log = get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    prefix = container.settings.api_prefix
    codec = container.codec
    gate = container.auth_gate

    def token_claims(identity) -> dict:
        return {"user_id": identity.id, "username": identity.username, "role": identity.role}

    @app.route(f"{prefix}/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        container.auth_service.ensure_initial_admin()

        data = json_payload()
        InputValidator(data).required(["username", "password"]).validate("Invalid input")

        user = container.auth_service.authenticate(str(data["username"]).strip(), str(data["password"]))
        public = user.to_public()

        token = codec.issue(
            {"user_id": user.id, "username": user.username, "role": user.role.value},
            container.settings.jwt_expiry,
        )
        gate.login(session, public)
        csrf_token = codec.issue_csrf(session)

        log.info("login_succeeded", user_id=user.id, username=user.username)
        return success("Login successful", {"token": token, "csrf_token": csrf_token, "user": public})

    @app.route(f"{prefix}/auth/logout", methods=["GET", "POST"], endpoint="auth_logout")
    def logout():
        gate.clear_session(session)
        return success("Logout successful")

    @app.route(f"{prefix}/auth/refresh", methods=["GET", "POST"], endpoint="auth_refresh")
    def refresh():
        identity = gate.require_auth(gate_request())
        token = codec.issue(token_claims(identity), container.settings.jwt_expiry)
        gate.ensure_session(session)
        csrf_token = codec.issue_csrf(session)
        return success(
            "Token refreshed",
            {"token": token, "csrf_token": csrf_token, "expires_in": container.settings.jwt_expiry},
        )

    @app.route(f"{prefix}/auth/check", methods=["GET"], endpoint="auth_check")
    def check():
        channel = gate.resolve(gate_request())
        if not channel.authenticated:
            raise AuthenticationError("Not authenticated")
        if channel.kind is ChannelKind.SESSION and isinstance(session.get("user"), dict):
            return success("Authenticated", session["user"])
        return success("Authenticated", channel.identity.to_dict())

    @app.route(f"{prefix}/auth/csrf", methods=["GET"], endpoint="auth_csrf")
    def csrf():
        gate.ensure_session(session)
        return success("CSRF token issued", {"csrf_token": codec.issue_csrf(session)})
