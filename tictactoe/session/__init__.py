"""
Session Module - Manages ephemeral game sessions.

A session represents one browser's play-through:
- Created when the player picks a mode
- Holds the current game and its AI opponent
- Reset keeps the mode and clears the board
- Dropped when the browser leaves or the session goes stale

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, Session
from .game_loop import GameLoop, TurnResult, status_message, turn_indicator
from .scheduler import AIMoveScheduler

__all__ = [
    "SessionManager",
    "Session",
    "GameLoop",
    "TurnResult",
    "status_message",
    "turn_indicator",
    "AIMoveScheduler",
]
