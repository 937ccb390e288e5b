"""
Session Manager - Creates and tracks in-memory runs.

LIFECYCLE:
1. A front end asks for a run -> new session with its own controller
2. Intents are routed to the session's controller
3. The run ends (escape, failure or abandon) -> session removed

PERSISTENCE RULES:
- Nothing is written to disk
- A session lives only as long as the process
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import logging
import time
import uuid

from ..config import GameConfig
from ..engine_core.events import RandomSource, SeededRandom
from .controller import TurnController


logger = logging.getLogger(__name__)


@dataclass
class Session:
    """One run owned by one controller."""
    session_id: str
    controller: TurnController
    created_at: float
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        """Check if the run is still being played."""
        return not self.controller.state.is_over


class SessionManager:
    """
    Manages runs.

    No persistence - sessions are in-memory only.
    """

    def __init__(self, config: GameConfig | None = None):
        self.config = config or GameConfig()
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        seed: int | None = None,
        random_source: RandomSource | None = None,
    ) -> Session:
        """
        Create a new run.

        Args:
            seed: Seed for the event deck (falls back to the config seed)
            random_source: Explicit source, overrides ``seed``

        Returns:
            New Session at the opening snapshot
        """
        if random_source is None:
            random_source = SeededRandom(seed if seed is not None else self.config.seed)

        session = Session(
            session_id=str(uuid.uuid4()),
            controller=TurnController(config=self.config, random_source=random_source),
            created_at=time.time(),
        )
        self._sessions[session.session_id] = session
        logger.debug("created session %s", session.session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Remove a session. Returns False if it did not exist."""
        session = self._sessions.pop(session_id, None)
        if session:
            logger.debug("ended session %s", session_id)
        return session is not None

    def list_active_sessions(self) -> list[str]:
        """List IDs of runs still in progress."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove sessions older than max_age.

        Runs abandoned mid-play are dropped as well as finished ones.
        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
        ]
        for session_id in to_remove:
            self.end_session(session_id)
        return len(to_remove)
