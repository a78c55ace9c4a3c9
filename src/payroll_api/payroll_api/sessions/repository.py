from __future__ import annotations

from typing import Optional, Protocol


class SessionRepository(Protocol):
    """Server-side record of live browser sessions.

    The cookie only carries the session id; a session is valid while its id
    is known here. `last_seen` is a unix timestamp in seconds.
    """

    def open_session(self, session_id: str, *, now: int) -> None:
        raise NotImplementedError

    def last_seen(self, session_id: str) -> Optional[int]:
        raise NotImplementedError

    def touch(self, session_id: str, *, now: int) -> None:
        raise NotImplementedError

    def revoke(self, session_id: str) -> None:
        raise NotImplementedError

    def purge_idle(self, *, older_than: int) -> int:
        raise NotImplementedError
