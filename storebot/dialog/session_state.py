"""In-memory per-user state for the guided recommendation dialog."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from threading import Lock
from typing import Literal

from storebot.recommend.models import Coordinate

DialogStage = Literal[
    "selecting_city",
    "selecting_district",
    "selecting_category",
    "location_received",
]


@dataclass(frozen=True)
class DialogSession:
    """Where one user is in the guided flow, plus what they picked so far."""

    user_id: str
    stage: DialogStage
    city: str | None = None
    district: str | None = None
    coordinate: Coordinate | None = None
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


class SessionStore:
    """Thread-safe session map keyed by user id; stale entries read as absent."""

    def __init__(self, ttl_seconds: int = 900, clock: Callable[[], float] = time.time) -> None:
        self._ttl_seconds = max(1, ttl_seconds)
        self._clock = clock
        self._lock = Lock()
        self._sessions: dict[str, DialogSession] = {}

    def get(self, user_id: str) -> DialogSession | None:
        with self._lock:
            session = self._sessions.get(user_id)
            if session is None:
                return None
            if self._clock() - session.updated_at > self._ttl_seconds:
                del self._sessions[user_id]
                return None
            return session

    def start(
        self,
        user_id: str,
        stage: DialogStage,
        *,
        city: str | None = None,
        district: str | None = None,
        coordinate: Coordinate | None = None,
    ) -> DialogSession:
        """Replace any existing session with a fresh one."""
        now = self._clock()
        session = DialogSession(
            user_id=user_id,
            stage=stage,
            city=city,
            district=district,
            coordinate=coordinate,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._sessions[user_id] = session
        return session

    def advance(self, session: DialogSession, stage: DialogStage, **changes: str | None) -> DialogSession:
        """Move to the next stage; the idle timeout restarts from this step."""
        updated = replace(session, stage=stage, updated_at=self._clock(), **changes)
        with self._lock:
            self._sessions[session.user_id] = updated
        return updated

    def clear(self, user_id: str) -> bool:
        """Delete one session; return True when it existed."""
        with self._lock:
            return self._sessions.pop(user_id, None) is not None
