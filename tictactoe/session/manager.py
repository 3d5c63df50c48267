"""
Session Manager - Creates and manages browser game sessions.

LIFECYCLE:
1. Browser picks a mode -> create a session (in-memory only)
2. During the game, moves and AI moves go through the session's GameLoop
3. Reset keeps the session and its mode, clears the board
4. Browser leaves or the session idles past its TTL -> session removed

PERSISTENCE RULES:
- NO database, no game history
- A lost session is simply started again
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import random
import time
import uuid

from ..engine_core.state import GameMode
from ..bots import HeuristicBot
from .game_loop import GameLoop

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """
    One browser's game.

    Contains:
    - The GameLoop driving the board and the bot
    - Timestamps used for stale-session cleanup
    """
    session_id: str
    loop: GameLoop
    created_at: float
    updated_at: float

    def is_active(self) -> bool:
        """Check if a game is still being played."""
        return self.loop.game is not None and self.loop.game.active

    def touch(self):
        self.updated_at = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with their own bot and random source
    - Track sessions by id
    - Clean up idle sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(self, mode: GameMode, seed: int | None = None) -> Session:
        """
        Create a new session and start its first game.

        Args:
            mode: Human vs Human or Human vs AI
            seed: Optional seed for the bot's corner/side tie-breaks

        Returns:
            New Session with a game in progress
        """
        session_id = str(uuid.uuid4())
        loop = GameLoop(bot=HeuristicBot(rng=random.Random(seed)))
        loop.start_session(mode)

        now = time.time()
        session = Session(
            session_id=session_id,
            loop=loop,
            created_at=now,
            updated_at=now,
        )
        self._sessions[session_id] = session
        logger.info("Created session %s (%s)", session_id, loop.mode.value)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop it from memory.

        Returns True if the session existed.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.loop.game = None
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_sessions(self) -> list[str]:
        """List IDs of all known sessions."""
        return list(self._sessions)

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions with a game in progress."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove sessions idle for longer than max_age.

        Called periodically to free memory. Returns how many were removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.updated_at > max_age_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
