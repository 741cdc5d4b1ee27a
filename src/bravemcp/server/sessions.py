# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""SSE session bookkeeping.

Each ``GET /sse`` connection walks ``idle -> connected -> closed``.  Sessions are
kept in a registry keyed by id, so a second client does not displace the first;
``POST /messages`` is rejected only when no session is connected at all.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
import time
from typing import TYPE_CHECKING
import uuid

from ..utils import get_logger


if TYPE_CHECKING:
    from ..metrics import SearchMetrics


class SessionState(str, Enum):
    IDLE = "idle"
    CONNECTED = "connected"
    CLOSED = "closed"


@dataclass(slots=True)
class SSESession:
    session_id: str
    state: SessionState = SessionState.IDLE
    connected_at: float | None = None
    closed_at: float | None = None

    def connect(self, now: float) -> None:
        if self.state is not SessionState.IDLE:
            raise RuntimeError(f"session {self.session_id} cannot connect from state {self.state.value}")
        self.state = SessionState.CONNECTED
        self.connected_at = now

    def close(self, now: float) -> bool:
        """Move to ``closed``; returns ``False`` when already closed."""
        if self.state is SessionState.CLOSED:
            return False
        self.state = SessionState.CLOSED
        self.closed_at = now
        return True

    @property
    def duration(self) -> float:
        if self.connected_at is None:
            return 0.0
        end = self.closed_at if self.closed_at is not None else time.monotonic()
        return max(0.0, end - self.connected_at)


class SessionRegistry:
    """Tracks connected SSE sessions for one transport."""

    def __init__(
        self,
        *,
        metrics: SearchMetrics | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._sessions: dict[str, SSESession] = {}
        self._metrics = metrics
        self._clock = clock
        self._logger = get_logger("bravemcp.sessions")

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    @property
    def has_active(self) -> bool:
        return bool(self._sessions)

    def active(self) -> tuple[SSESession, ...]:
        return tuple(self._sessions.values())

    def get(self, session_id: str) -> SSESession | None:
        return self._sessions.get(session_id)

    def open(self) -> SSESession:
        session = SSESession(session_id=uuid.uuid4().hex)
        session.connect(self._clock())
        self._sessions[session.session_id] = session
        if self._metrics is not None:
            self._metrics.connection_opened()
        self._logger.info("SSE connection established", extra={"session_id": session.session_id})
        return session

    def close(self, session: SSESession) -> None:
        if not session.close(self._clock()):
            return
        self._sessions.pop(session.session_id, None)
        if self._metrics is not None:
            self._metrics.connection_closed(session.duration)
        self._logger.info("Client disconnected", extra={"session_id": session.session_id})

    @contextmanager
    def track(self) -> Iterator[SSESession]:
        """Open a session for the duration of the ``with`` block."""
        session = self.open()
        try:
            yield session
        finally:
            self.close(session)


__all__ = ["SSESession", "SessionRegistry", "SessionState"]
