from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.constants import CSRF_EXEMPT_METHODS, CSRF_FIELD_NAME, CSRF_HEADER_NAME, SESSION_ID_KEY
from ..core.exceptions import AuthorizationError
from ..core.logging import get_logger
from ..sessions.repository import SessionRepository
from .auth_gate import GateRequest
from .token_codec import TokenCodec

log = get_logger(__name__)


def _non_empty(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def find_csrf_candidate(request: GateRequest) -> Optional[str]:
    """Form field, then header, then JSON body field. First non-empty wins."""
    candidate = _non_empty(request.form.get(CSRF_FIELD_NAME))
    if candidate:
        return candidate
    candidate = _non_empty(request.headers.get(CSRF_HEADER_NAME))
    if candidate:
        return candidate
    if isinstance(request.json_body, Mapping):
        return _non_empty(request.json_body.get(CSRF_FIELD_NAME))
    return None


class CSRFGate:
    """Double-submit check for state-changing, cookie-authenticated requests.

    Bearer-token clients are exempt: the check passes on the `Bearer ` prefix
    alone, whether or not the token later verifies. With a session
    repository the token must also sit in a session whose id is still live,
    so a token copied out of a logged-out cookie is refused.
    """

    def __init__(
        self,
        codec: TokenCodec,
        *,
        sessions: Optional[SessionRepository] = None,
        enabled: bool = True,
    ):
        self._codec = codec
        self._sessions = sessions
        self._enabled = enabled

    def _session_live(self, session: Mapping[str, Any]) -> bool:
        if self._sessions is None:
            return True
        sid = session.get(SESSION_ID_KEY)
        return isinstance(sid, str) and bool(sid) and self._sessions.last_seen(sid) is not None

    def requires_check(self, request: GateRequest) -> bool:
        if not self._enabled:
            return False
        if request.method.upper() in CSRF_EXEMPT_METHODS:
            return False
        return not request.authorization.startswith("Bearer ")

    def verify(self, request: GateRequest) -> None:
        if not self.requires_check(request):
            return
        candidate = find_csrf_candidate(request)
        if (
            not candidate
            or not self._codec.verify_csrf(request.session, candidate)
            or not self._session_live(request.session)
        ):
            log.warning("csrf_rejected", method=request.method, has_candidate=bool(candidate))
            raise AuthorizationError("CSRF token validation failed")
