"""In-memory server-side sessions.

Sessions live in this process only (no horizontal scaling). A restart logs
everyone out.
"""

from __future__ import annotations

import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass
class Session:
    token: str
    user_id: str
    cached_name: str
    # Snapshot of the user's admin flag at login. Role changes need a re-login.
    cached_is_admin: bool
    issued_at: float
    expires_at: float

    def identity(self) -> Dict[str, object]:
        return {"id": self.user_id, "name": self.cached_name, "is_admin": bool(self.cached_is_admin)}


class SessionStore:
    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.time):
        self.ttl_seconds = max(1, int(ttl_seconds))
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: Dict[str, Session] = {}

    def create(self, *, user_id: str, name: str, is_admin: bool) -> Session:
        now = self._clock()
        s = Session(
            token=secrets.token_urlsafe(32),
            user_id=str(user_id),
            cached_name=name,
            cached_is_admin=bool(is_admin),
            issued_at=now,
            expires_at=now + self.ttl_seconds,
        )
        with self._lock:
            self._sessions[s.token] = s
        return s

    def get(self, token: str | None, *, touch: bool = True) -> Optional[Session]:
        """Return the live session for token, sliding its expiry forward."""
        if not token:
            return None
        now = self._clock()
        with self._lock:
            s = self._sessions.get(token)
            if s is None:
                return None
            if s.expires_at <= now:
                del self._sessions[token]
                return None
            if touch:
                s.expires_at = now + self.ttl_seconds
            return s

    def destroy(self, token: str | None) -> bool:
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            dead = [t for t, s in self._sessions.items() if s.expires_at <= now]
            for t in dead:
                del self._sessions[t]
        return len(dead)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
