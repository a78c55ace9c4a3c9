from __future__ import annotations

import re
import secrets
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, MutableMapping, Optional, Union

from ..common.datetime_utils import now_ts
from ..core.constants import SESSION_ID_KEY
from ..core.enums import ChannelKind, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, TokenError
from ..core.logging import get_logger
from ..sessions.repository import SessionRepository
from .token_codec import TokenCodec

log = get_logger(__name__)

_BEARER_RE = re.compile(r"Bearer\s(\S+)")

RoleSpec = Union[str, Role, Iterable[Union[str, Role]]]


@dataclass(frozen=True)
class Identity:
    id: Any
    username: str
    role: str

    def to_dict(self) -> dict:
        return {"id": self.id, "username": self.username, "role": self.role}


@dataclass(frozen=True)
class AuthChannel:
    """Which channel authenticated the request, and as whom."""

    kind: ChannelKind
    identity: Optional[Identity] = None

    @property
    def authenticated(self) -> bool:
        return self.kind is not ChannelKind.NONE


UNAUTHENTICATED = AuthChannel(ChannelKind.NONE)


@dataclass
class GateRequest:
    """The parts of an HTTP request the gates look at.

    `session` is the live session handle; the gates mutate it in place.
    """

    method: str
    headers: Mapping[str, str]
    session: MutableMapping[str, Any]
    form: Mapping[str, Any] = field(default_factory=dict)
    json_body: Optional[Any] = None

    @property
    def authorization(self) -> str:
        return self.headers.get("Authorization") or ""


def _role_value(role: Union[str, Role]) -> str:
    return role.value if isinstance(role, Role) else str(role)


def bearer_token(authorization: str) -> Optional[str]:
    m = _BEARER_RE.search(authorization or "")
    return m.group(1) if m else None


class AuthGate:
    """Single authority for "is this request allowed through" and "who is the caller".

    Session identity is tried first; a bearer token is only consulted when
    the session carries no identity. A browser session is valid only while
    its id (`sid`) is live in the session repository: logout revokes it
    there, so a copied cookie stops working. An idle-expired or revoked
    session clears itself and does not fall back to the bearer channel.
    """

    def __init__(
        self,
        codec: TokenCodec,
        sessions: SessionRepository,
        *,
        session_timeout: int,
        clock: Callable[[], int] = now_ts,
    ):
        self._codec = codec
        self._sessions = sessions
        self._session_timeout = int(session_timeout)
        self._clock = clock

    def session_id(self, session: Mapping[str, Any]) -> Optional[str]:
        """The session's server-side id, or None when unknown or revoked."""
        sid = session.get(SESSION_ID_KEY)
        if not isinstance(sid, str) or not sid:
            return None
        return sid if self._sessions.last_seen(sid) is not None else None

    def start_session(self, session: MutableMapping[str, Any]) -> str:
        """Bind the session to a fresh server-side id, revoking the previous one."""
        old = session.get(SESSION_ID_KEY)
        if isinstance(old, str) and old:
            self._sessions.revoke(old)
        now = self._clock()
        self._sessions.purge_idle(older_than=now - max(self._session_timeout, self._codec.csrf_ttl))
        sid = secrets.token_urlsafe(32)
        self._sessions.open_session(sid, now=now)
        session[SESSION_ID_KEY] = sid
        return sid

    def ensure_session(self, session: MutableMapping[str, Any]) -> str:
        """Reuse a live session id; a revoked one wipes the stale cookie first."""
        sid = self.session_id(session)
        if sid is not None:
            return sid
        if session.get(SESSION_ID_KEY):
            session.clear()
        return self.start_session(session)

    def resolve(self, request: GateRequest) -> AuthChannel:
        session = request.session
        if session.get("user_id"):
            now = self._clock()
            sid = session.get(SESSION_ID_KEY)
            last = self._sessions.last_seen(sid) if isinstance(sid, str) and sid else None
            if last is None:
                log.info("session_revoked", user_id=session.get("user_id"))
                session.clear()
                return UNAUTHENTICATED
            if now - last > self._session_timeout:
                log.info("session_idle_expired", user_id=session.get("user_id"))
                self.clear_session(session)
                return UNAUTHENTICATED
            self._sessions.touch(sid, now=now)
            session["last_activity"] = now
            return AuthChannel(
                ChannelKind.SESSION,
                Identity(
                    id=session["user_id"],
                    username=session.get("username", ""),
                    role=session.get("role", ""),
                ),
            )

        token = bearer_token(request.authorization)
        if token:
            try:
                claims = self._codec.verify(token)
            except TokenError as exc:
                # Reason stays server-side: clients only ever see a 401.
                log.debug("bearer_token_rejected", reason=type(exc).__name__)
                return UNAUTHENTICATED
            return AuthChannel(
                ChannelKind.BEARER,
                Identity(
                    id=claims.get("user_id", 0),
                    username=claims.get("username", ""),
                    role=claims.get("role", ""),
                ),
            )

        return UNAUTHENTICATED

    def is_authenticated(self, request: GateRequest) -> bool:
        return self.resolve(request).authenticated

    def current_user(self, request: GateRequest) -> Optional[Identity]:
        return self.resolve(request).identity

    def require_auth(self, request: GateRequest) -> Identity:
        channel = self.resolve(request)
        if not channel.authenticated:
            raise AuthenticationError("Authentication required")
        return channel.identity

    @staticmethod
    def role_matches(identity: Optional[Identity], roles: RoleSpec) -> bool:
        if identity is None or not identity.role:
            return False
        if isinstance(roles, (str, Role)):
            return identity.role == _role_value(roles)
        return identity.role in {_role_value(r) for r in roles}

    def has_role(self, request: GateRequest, roles: RoleSpec) -> bool:
        return self.role_matches(self.current_user(request), roles)

    def require_role(self, request: GateRequest, roles: RoleSpec) -> Identity:
        identity = self.require_auth(request)
        if not self.role_matches(identity, roles):
            raise AuthorizationError("You do not have permission to access this resource")
        return identity

    def login(self, session: MutableMapping[str, Any], user: Mapping[str, Any]) -> None:
        self.start_session(session)
        session["user_id"] = user["id"]
        session["username"] = user.get("username", "")
        session["role"] = user.get("role", "")
        session["user"] = dict(user)
        session["last_activity"] = self._clock()

    def clear_session(self, session: MutableMapping[str, Any]) -> None:
        sid = session.get(SESSION_ID_KEY)
        if isinstance(sid, str) and sid:
            self._sessions.revoke(sid)
        session.clear()
