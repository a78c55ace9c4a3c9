from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import secrets
from typing import Any, Callable, Mapping, MutableMapping, Optional

from ..common.datetime_utils import now_ts
from ..core.constants import CSRF_FIELD_NAME
from ..core.exceptions import (
    BadSignatureError,
    MalformedTokenError,
    TokenEncodingError,
    TokenExpiredError,
    UnsupportedAlgorithmError,
)

ALGORITHM = "HS256"
_HEADER = {"alg": ALGORITHM, "typ": "JWT"}


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def b64url_decode(segment: str) -> bytes:
    padding = "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(segment + padding)


def _dumps(obj: Any) -> bytes:
    return json.dumps(obj, separators=(",", ":")).encode("utf-8")


class TokenCodec:
    """Compact HS256 bearer tokens and session-bound CSRF tokens.

    Bearer tokens are `b64url(header).b64url(payload).b64url(hmac)` and are
    never stored server-side. CSRF tokens live in the session under
    `csrf_token` as `{"token": ..., "expires": ...}`; issuing a new one
    overwrites the previous value.
    """

    def __init__(
        self,
        secret: str,
        *,
        csrf_ttl: int,
        clock: Callable[[], int] = now_ts,
    ):
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret.encode("utf-8")
        self._csrf_ttl = int(csrf_ttl)
        self._clock = clock

    @property
    def csrf_ttl(self) -> int:
        return self._csrf_ttl

    def _sign(self, signing_input: str) -> bytes:
        return hmac.new(self._secret, signing_input.encode("ascii"), hashlib.sha256).digest()

    def issue(self, claims: Mapping[str, Any], ttl_seconds: int) -> str:
        now = self._clock()
        payload = dict(claims)
        payload["exp"] = now + int(ttl_seconds)
        payload["iat"] = now
        try:
            payload_b64 = b64url_encode(_dumps(payload))
        except (TypeError, ValueError) as exc:
            raise TokenEncodingError(f"claims are not serializable: {exc}") from exc

        signing_input = f"{b64url_encode(_dumps(_HEADER))}.{payload_b64}"
        return f"{signing_input}.{b64url_encode(self._sign(signing_input))}"

    def verify(self, token: str) -> dict:
        """Return the claims of a valid token.

        Raises:
            MalformedTokenError: not three segments, undecodable header/payload,
                or a header algorithm other than HS256.
            BadSignatureError: the signature segment differs from the expected one.
            TokenExpiredError: `exp` is in the past.
        """
        parts = token.split(".") if isinstance(token, str) else []
        if len(parts) != 3:
            raise MalformedTokenError("token must have exactly three segments")
        if not token.isascii():
            raise MalformedTokenError("token contains non-ascii characters")
        header_b64, payload_b64, signature_b64 = parts

        try:
            header = json.loads(b64url_decode(header_b64))
        except (binascii.Error, ValueError) as exc:
            raise MalformedTokenError("undecodable header") from exc
        if not isinstance(header, dict):
            raise MalformedTokenError("header is not an object")
        if header.get("alg") != ALGORITHM:
            raise UnsupportedAlgorithmError(f"unsupported alg {header.get('alg')!r}")

        # Compared as text: base64 decoding ignores stray characters and padding bits.
        expected = b64url_encode(self._sign(f"{header_b64}.{payload_b64}"))
        if not hmac.compare_digest(expected, signature_b64):
            raise BadSignatureError("signature mismatch")

        try:
            claims = json.loads(b64url_decode(payload_b64))
        except (binascii.Error, ValueError) as exc:
            raise MalformedTokenError("undecodable payload") from exc
        if not isinstance(claims, dict):
            raise MalformedTokenError("payload is not an object")

        exp = claims.get("exp")
        if exp is not None:
            try:
                expired = float(exp) < self._clock()
            except (TypeError, ValueError) as exc:
                raise MalformedTokenError("exp is not numeric") from exc
            if expired:
                raise TokenExpiredError("token expired")
        return claims

    def issue_csrf(self, session: MutableMapping[str, Any]) -> str:
        token = secrets.token_hex(32)
        session[CSRF_FIELD_NAME] = {"token": token, "expires": self._clock() + self._csrf_ttl}
        return token

    def verify_csrf(self, session: Mapping[str, Any], candidate: Optional[str]) -> bool:
        entry = session.get(CSRF_FIELD_NAME)
        if not isinstance(entry, Mapping) or not candidate:
            return False
        stored = entry.get("token")
        if not isinstance(stored, str) or not isinstance(candidate, str):
            return False
        if not hmac.compare_digest(stored.encode("utf-8"), candidate.encode("utf-8")):
            return False
        return int(entry.get("expires", 0)) >= self._clock()
