from __future__ import annotations

from typing import Iterable, Optional

from ..core.constants import CORS_MAX_AGE
from ..core.logging import get_logger

log = get_logger(__name__)

ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization, X-CSRF-Token, X-Requested-With"


class CORSPolicy:
    """Decides the CORS response headers for a request origin.

    Registered origins are echoed. Unregistered origins are echoed in
    development (with a warning) and replaced by the frontend URL otherwise.
    """

    def __init__(self, *, allowed_origins: Iterable[str], frontend_url: str, development: bool):
        self._allowed = set(allowed_origins)
        self._frontend_url = frontend_url
        self._development = development

    def allow_origin(self, origin: Optional[str]) -> str:
        origin = origin or ""
        if origin in self._allowed:
            return origin
        if self._development:
            log.warning("cors_unregistered_origin", origin=origin)
            return origin
        return self._frontend_url

    def headers_for(self, origin: Optional[str]) -> dict[str, str]:
        return {
            "Access-Control-Allow-Origin": self.allow_origin(origin),
            "Access-Control-Allow-Credentials": "true",
            "Access-Control-Allow-Methods": ALLOW_METHODS,
            "Access-Control-Allow-Headers": ALLOW_HEADERS,
            "Access-Control-Max-Age": str(CORS_MAX_AGE),
        }
