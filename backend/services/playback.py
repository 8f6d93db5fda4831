"""Server-side playback sessions.

Each session owns one ``RankedSeriesAnimator`` ticking on a thread-backed
interval. Clients poll the latest render plan and drive the controls over
HTTP. Sessions are capped and expire after ``SESSION_MAX_AGE_SECONDS``.
"""

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field

from backend.core import config
from carstats.data.series import Series
from carstats.visuals.anims.animator import AnimatorConfig, RankedSeriesAnimator
from carstats.visuals.anims.timers import IntervalFactory, ThreadingInterval

logger = logging.getLogger(__name__)

ACTIONS = ("start", "pause", "resume", "step_forward", "step_backward", "rewind")


class SessionLimitError(RuntimeError):
    pass


@dataclass
class PlaybackSession:
    session_id: str
    animator: RankedSeriesAnimator
    created: float = field(default_factory=time.time)
    touched: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        plan = self.animator.plan
        return {
            "session_id": self.session_id,
            **self.animator.status(),
            "plan": plan.to_dict() if plan else None,
        }


class PlaybackRegistry:
    """In-memory session store.

    Args:
        max_sessions: Cap on concurrent sessions.
        max_age_seconds: Idle sessions older than this are closed.
        interval_factory: Timer backend handed to each animator.
    """

    def __init__(
        self,
        max_sessions: int = config.MAX_SESSIONS,
        max_age_seconds: int = config.SESSION_MAX_AGE_SECONDS,
        interval_factory: IntervalFactory = ThreadingInterval,
    ) -> None:
        self.max_sessions = max_sessions
        self.max_age_seconds = max_age_seconds
        self.interval_factory = interval_factory
        self._sessions: dict[str, PlaybackSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def cleanup_idle_sessions(self) -> int:
        """Close sessions idle for longer than ``max_age_seconds``."""
        now = time.time()
        with self._lock:
            stale = [
                sid
                for sid, session in self._sessions.items()
                if now - session.touched > self.max_age_seconds
            ]
            for sid in stale:
                self._sessions.pop(sid).animator.close()
        if stale:
            logger.info("playback: closed %s idle sessions", len(stale))
        return len(stale)

    def create(self, series: Series, animator_config: AnimatorConfig) -> PlaybackSession:
        """Open a session and start playback immediately.

        Raises:
            SessionLimitError: When ``max_sessions`` are already open.
        """
        self.cleanup_idle_sessions()
        with self._lock:
            if len(self._sessions) >= self.max_sessions:
                raise SessionLimitError("too many playback sessions")
            session_id = str(uuid.uuid4())
            animator = RankedSeriesAnimator(
                series, animator_config, interval_factory=self.interval_factory
            )
            session = PlaybackSession(session_id, animator)
            self._sessions[session_id] = session
        animator.start()
        logger.info("playback: session %s started (%s ticks)", session_id, len(series))
        return session

    def get(self, session_id: str) -> PlaybackSession | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                session.touched = time.time()
            return session

    def control(self, session_id: str, action: str, steps: int = 5) -> tuple[PlaybackSession, bool] | None:
        """Apply a control action; returns the session and whether it took effect."""
        if action not in ACTIONS:
            raise ValueError(f"unknown action {action!r}")
        session = self.get(session_id)
        if session is None:
            return None
        animator = session.animator
        done = animator.rewind(steps) if action == "rewind" else getattr(animator, action)()
        return session, done

    def close(self, session_id: str) -> bool:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.animator.close()
        logger.info("playback: session %s closed", session_id)
        return True

    def close_all(self) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.animator.close()


registry = PlaybackRegistry()
