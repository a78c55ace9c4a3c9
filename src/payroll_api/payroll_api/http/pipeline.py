from __future__ import annotations

from typing import Optional, Tuple

from flask import Flask, g, request
from werkzeug.exceptions import HTTPException

from ..container import Container
from ..core.exceptions import AuthenticationError, DomainError
from ..core.logging import get_logger
from .context import gate_request
from .responses import error

log = get_logger(__name__)

# Resources that skip both CSRF and authentication.
PUBLIC_RESOURCES = frozenset({"auth"})
# (resource, action) pairs that skip authentication but still need a CSRF token.
AUTH_EXEMPT = frozenset({("users", "create")})


def route_parts(path: str, api_prefix: str) -> Tuple[Optional[str], Optional[str]]:
    """Split `<prefix>/<resource>/<action>/...` into (resource, action)."""
    if api_prefix:
        if path != api_prefix and not path.startswith(api_prefix + "/"):
            return None, None
        path = path[len(api_prefix) :]
    parts = [p for p in path.split("/") if p]
    if not parts:
        return None, None
    return parts[0], parts[1] if len(parts) > 1 else None


def install(app: Flask, container: Container) -> None:
    settings = container.settings

    @app.before_request
    def _gate():
        if request.method == "OPTIONS":
            # Pre-flight: CORS headers are added in after_request.
            return app.response_class(status=200)

        if settings.is_development:
            log.debug("api_request", method=request.method, path=request.path)

        resource, action = route_parts(request.path, settings.api_prefix)
        if resource is None or resource in PUBLIC_RESOURCES:
            return None

        req = gate_request()
        container.csrf_gate.verify(req)

        channel = container.auth_gate.resolve(req)
        g.auth_channel = channel
        if (resource, action) in AUTH_EXEMPT:
            return None
        if not channel.authenticated:
            raise AuthenticationError("Authentication required")
        return None

    @app.after_request
    def _cors(response):
        for name, value in container.cors.headers_for(request.headers.get("Origin")).items():
            if value:
                response.headers[name] = value
        return response

    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        return error(exc.status_code, str(exc), getattr(exc, "errors", None))

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        if exc.code == 404:
            return error(404, "Endpoint not found")
        if exc.code == 405:
            return error(400, "Method not supported")
        return error(exc.code or 500, exc.description or exc.name)

    @app.errorhandler(Exception)
    def _unhandled(exc: Exception):
        log.exception("unhandled_error", path=request.path, method=request.method)
        if settings.is_development:
            return error(500, f"Server error: {exc}")
        return error(500, "An unexpected error occurred. Please try again later.")
